from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from mention_gateway.models import Category, DispatchRequest


class Transport(str, Enum):
    JSON = "json"
    MULTIPART = "multipart"


@dataclass(frozen=True)
class OutboundPayload:
    """Category-specific body for one backend call."""
    transport: Transport
    fields: Dict[str, Any]
    # multipart only: field name -> (filename, content, content type)
    files: Dict[str, Tuple[str, bytes, str]] = field(default_factory=dict)


def base_payload(request: DispatchRequest) -> Dict[str, Any]:
    """Metadata merged with the post text and the command; the latter win."""
    return {
        **request.metadata,
        "original_tweet": request.original_context,
        "user_command": request.command,
    }


class PayloadBuilder(ABC):
    """Interface for building the outbound body of one category."""
    category: Category

    @abstractmethod
    def build(self, request: DispatchRequest) -> OutboundPayload:
        raise NotImplementedError


# -------------------------
# Concrete builders
# -------------------------

@dataclass(frozen=True)
class ImageAnalysisPayloadBuilder(PayloadBuilder):
    category: Category = Category.SCREENSHOT_RESEARCH
    filename: str = "media.jpg"
    content_type: str = "image/jpeg"

    def build(self, request: DispatchRequest) -> OutboundPayload:
        files = {}
        if request.attachment:
            files["image"] = (self.filename, request.attachment, self.content_type)
        return OutboundPayload(
            transport=Transport.MULTIPART,
            fields={"tweet_text": request.original_context},
            files=files,
        )


# Sources for JSON extra fields
CONTEXT = "context"
COMMAND = "command"


@dataclass(frozen=True)
class JsonPayloadBuilder(PayloadBuilder):
    """Base payload plus extra fields copied from the post text or the command."""
    category: Category = Category.GENERIC
    extra_fields: Mapping[str, str] = field(default_factory=dict)

    def build(self, request: DispatchRequest) -> OutboundPayload:
        sources = {CONTEXT: request.original_context, COMMAND: request.command}
        fields = base_payload(request)
        for name, source in self.extra_fields.items():
            fields[name] = sources[source]
        return OutboundPayload(transport=Transport.JSON, fields=fields)


GENERIC_BUILDER = JsonPayloadBuilder(
    category=Category.GENERIC,
    extra_fields={"tweet": CONTEXT, "instructions": COMMAND},
)


# -------------------------
# Factory
# -------------------------

class PayloadBuilderFactory:
    _registry: Dict[Category, PayloadBuilder] = {}

    @classmethod
    def register(cls, builder: PayloadBuilder) -> None:
        category = getattr(builder, "category", None)
        if not isinstance(category, Category):
            raise ValueError(f"{type(builder).__name__} must define a category")
        cls._registry[category] = builder

    @classmethod
    def create(cls, category: Optional[Category]) -> PayloadBuilder:
        """Builder for the category; anything unregistered gets the generic shape."""
        return cls._registry.get(category, GENERIC_BUILDER)

    @classmethod
    def available(cls) -> list:
        return sorted(c.value for c in cls._registry)


# Register defaults (call once at import time)
PayloadBuilderFactory.register(ImageAnalysisPayloadBuilder())
PayloadBuilderFactory.register(JsonPayloadBuilder(category=Category.IMPERSONATION))
PayloadBuilderFactory.register(JsonPayloadBuilder(category=Category.MEME_CREATOR, extra_fields={"input_text": CONTEXT}))
PayloadBuilderFactory.register(JsonPayloadBuilder(category=Category.FACT_CHECKER, extra_fields={"claim": CONTEXT}))
PayloadBuilderFactory.register(JsonPayloadBuilder(category=Category.VIRAL_THREAD, extra_fields={"topic": CONTEXT}))
PayloadBuilderFactory.register(JsonPayloadBuilder(category=Category.SENTIMENT, extra_fields={"tweet_text": CONTEXT}))
PayloadBuilderFactory.register(GENERIC_BUILDER)
