"""
Orchestrator for one inbound mention: validate, classify, fetch media, dispatch.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from mention_gateway.config import GatewayConfig
from mention_gateway.errors import GatewayError, ValidationError
from mention_gateway.models import ClassificationRequest, DispatchRequest, MentionPost, MentionResult
from mention_gateway.observability.logger import (
    bind_request_id,
    get_logger,
    get_request_id,
    new_request_id,
)
from .classifier import CommandClassifier
from .dispatcher import Dispatcher
from .media import MediaFetcher, extract_media_locations


MISSING_FIELDS_MESSAGE = "Both user command and original tweet are required"


class MentionState(str, Enum):
    VALIDATING = "validating"
    CLASSIFYING = "classifying"
    FETCHING_MEDIA = "fetching_media"
    DISPATCHING = "dispatching"
    RESPONDING = "responding"


def _is_missing(value: Any) -> bool:
    # Falsy scalars (None, "", False, 0) are missing; containers only when None.
    if isinstance(value, (str, bool, int, float)):
        return not value
    return value is None


class MentionOrchestrator:
    """Runs the per-request flow; every step is awaited in order and never retried."""

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        classifier: Optional[CommandClassifier] = None,
        media_fetcher: Optional[MediaFetcher] = None,
        dispatcher: Optional[Dispatcher] = None,
    ):
        self.config = config or GatewayConfig.from_env()
        self.classifier = classifier or CommandClassifier(self.config)
        self.media_fetcher = media_fetcher or MediaFetcher()
        self.dispatcher = dispatcher or Dispatcher(self.config)
        self.logger = get_logger("mention_gateway.router.orchestrator")

    @staticmethod
    def validate(user_command: Any, original_tweet: Any) -> None:
        if _is_missing(user_command) or _is_missing(original_tweet):
            raise ValidationError(MISSING_FIELDS_MESSAGE)

    async def process_mention(self, user_command: Any, original_tweet: Any) -> MentionResult:
        """
        Process one mention end-to-end.

        Args:
            user_command: The command text addressed to the bot
            original_tweet: Post text, or a post object with ``media_urls``

        Returns:
            MentionResult with the resolved category and the backend result

        Raises:
            ValidationError: a required field is missing (nothing else is called)
            GatewayError: classification, media download or dispatch failed
        """
        with bind_request_id(get_request_id() or new_request_id()):
            state = MentionState.VALIDATING
            try:
                self.validate(user_command, original_tweet)
                command = str(user_command)
                post = MentionPost.from_payload(original_tweet)

                state = MentionState.CLASSIFYING
                label = await self.classifier.classify_label(ClassificationRequest(command, post.text))
                category = self.classifier.resolve(label)

                attachment = None
                locations = extract_media_locations(post)
                if locations:
                    state = MentionState.FETCHING_MEDIA
                    # One attachment per request.
                    attachment = await self.media_fetcher.fetch(locations[0])

                state = MentionState.DISPATCHING
                result = await self.dispatcher.dispatch(
                    DispatchRequest(
                        category=category,
                        command=command,
                        original_context=post.text,
                        attachment=attachment,
                        metadata={
                            "processed_at": datetime.now(timezone.utc).isoformat(),
                            "category": category.value,
                        },
                    )
                )

                state = MentionState.RESPONDING
                return MentionResult(success=True, category=category, result=result, raw_label=label)

            except ValidationError as e:
                self.logger.warning(f"Rejected mention: {e}")
                raise
            except GatewayError as e:
                self.logger.error(f"Mention processing failed while {state.value}: {e}")
                raise
            except Exception as e:
                self.logger.exception(f"Unexpected error while {state.value}: {e}")
                raise
