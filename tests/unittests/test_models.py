import dataclasses
import json
import unittest

from mention_gateway.models import Category, MentionPost, MentionResult


class TestCategory(unittest.TestCase):
    def test_from_label_exact_match(self) -> None:
        self.assertIs(Category.from_label("Fact-Checker Agent"), Category.FACT_CHECKER)
        self.assertIs(Category.from_label("Screenshot + Research Agent"), Category.SCREENSHOT_RESEARCH)

    def test_from_label_is_case_sensitive(self) -> None:
        self.assertIsNone(Category.from_label("fact-checker agent"))

    def test_from_label_unknown_is_none(self) -> None:
        self.assertIsNone(Category.from_label("Unknown Thing"))

    def test_seven_categories(self) -> None:
        self.assertEqual(len(list(Category)), 7)


class TestMentionPost(unittest.TestCase):
    def test_plain_text(self) -> None:
        post = MentionPost.from_payload("Cats can fly.")
        self.assertEqual(post.text, "Cats can fly.")
        self.assertEqual(post.media_urls, [])

    def test_mapping_with_media(self) -> None:
        post = MentionPost.from_payload({
            "text": "Look at this chart",
            "media_urls": ["https://img.example/1.jpg", "https://img.example/2.jpg"],
        })
        self.assertEqual(post.text, "Look at this chart")
        self.assertEqual(post.media_urls, ["https://img.example/1.jpg", "https://img.example/2.jpg"])

    def test_json_string_with_media(self) -> None:
        raw = json.dumps({"text": "A screenshot", "media_urls": ["https://img.example/a.png"]})
        post = MentionPost.from_payload(raw)
        self.assertEqual(post.text, "A screenshot")
        self.assertEqual(post.media_urls, ["https://img.example/a.png"])

    def test_invalid_json_string_is_plain_text(self) -> None:
        post = MentionPost.from_payload("{not json")
        self.assertEqual(post.text, "{not json")
        self.assertEqual(post.media_urls, [])

    def test_mapping_without_text_keeps_serialized_post(self) -> None:
        post = MentionPost.from_payload({"media_urls": []})
        self.assertEqual(json.loads(post.text), {"media_urls": []})


class TestMentionResult(unittest.TestCase):
    def test_to_response(self) -> None:
        result = MentionResult(success=True, category=Category.MEME_CREATOR, result={"url": "x"})
        self.assertEqual(
            result.to_response(),
            {"success": True, "category": "Meme Creator", "result": {"url": "x"}},
        )

    def test_fields(self) -> None:
        self.assertEqual(
            [f.name for f in dataclasses.fields(MentionResult)],
            ["success", "category", "result", "raw_label"],
        )


if __name__ == "__main__":
    unittest.main()
