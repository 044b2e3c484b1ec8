import unittest

from mention_gateway.models import Category, DispatchRequest
from mention_gateway.router.payloads import PayloadBuilderFactory, Transport, base_payload


def _request(category, attachment=None):
    return DispatchRequest(
        category=category,
        command="do the thing",
        original_context="Cats can fly.",
        attachment=attachment,
        metadata={"processed_at": "2026-01-01T00:00:00+00:00", "category": "x"},
    )


class TestPayloadBuilders(unittest.TestCase):
    def test_base_payload_overrides_metadata(self) -> None:
        request = DispatchRequest(
            category=Category.GENERIC,
            command="cmd",
            original_context="ctx",
            metadata={"user_command": "stale", "extra": 1},
        )
        self.assertEqual(
            base_payload(request),
            {"extra": 1, "original_tweet": "ctx", "user_command": "cmd"},
        )

    def test_json_extra_fields(self) -> None:
        expected = {
            Category.IMPERSONATION: {},
            Category.MEME_CREATOR: {"input_text": "Cats can fly."},
            Category.FACT_CHECKER: {"claim": "Cats can fly."},
            Category.VIRAL_THREAD: {"topic": "Cats can fly."},
            Category.SENTIMENT: {"tweet_text": "Cats can fly."},
            Category.GENERIC: {"tweet": "Cats can fly.", "instructions": "do the thing"},
        }
        for category, extra in expected.items():
            with self.subTest(category=category.value):
                payload = PayloadBuilderFactory.create(category).build(_request(category))
                self.assertEqual(payload.transport, Transport.JSON)
                self.assertEqual(payload.fields["original_tweet"], "Cats can fly.")
                self.assertEqual(payload.fields["user_command"], "do the thing")
                self.assertEqual(payload.fields["processed_at"], "2026-01-01T00:00:00+00:00")
                for name, value in extra.items():
                    self.assertEqual(payload.fields[name], value)
                self.assertEqual(payload.files, {})

    def test_image_category_with_attachment(self) -> None:
        payload = PayloadBuilderFactory.create(Category.SCREENSHOT_RESEARCH).build(
            _request(Category.SCREENSHOT_RESEARCH, attachment=b"\xff\xd8jpeg")
        )
        self.assertEqual(payload.transport, Transport.MULTIPART)
        self.assertEqual(payload.fields, {"tweet_text": "Cats can fly."})
        self.assertEqual(payload.files["image"], ("media.jpg", b"\xff\xd8jpeg", "image/jpeg"))

    def test_image_category_without_attachment_omits_image(self) -> None:
        payload = PayloadBuilderFactory.create(Category.SCREENSHOT_RESEARCH).build(
            _request(Category.SCREENSHOT_RESEARCH)
        )
        self.assertEqual(payload.transport, Transport.MULTIPART)
        self.assertNotIn("image", payload.files)
        self.assertEqual(payload.fields, {"tweet_text": "Cats can fly."})

    def test_unregistered_category_uses_generic_shape(self) -> None:
        payload = PayloadBuilderFactory.create(None).build(_request(Category.GENERIC))
        self.assertEqual(payload.fields["tweet"], "Cats can fly.")
        self.assertEqual(payload.fields["instructions"], "do the thing")

    def test_every_category_registered(self) -> None:
        self.assertEqual(PayloadBuilderFactory.available(), sorted(c.value for c in Category))


if __name__ == "__main__":
    unittest.main()
