"""
Data models for the mention gateway.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Category(str, Enum):
    """Capabilities a command can be routed to."""
    SCREENSHOT_RESEARCH = "Screenshot + Research Agent"
    IMPERSONATION = "Impersonation Agent"
    VIRAL_THREAD = "Viral Thread Generator"
    FACT_CHECKER = "Fact-Checker Agent"
    SENTIMENT = "Sentiment Analyzer"
    MEME_CREATOR = "Meme Creator"
    GENERIC = "Generic"

    @classmethod
    def from_label(cls, label: str) -> Optional["Category"]:
        """Exact, case-sensitive match on the label; None when unrecognized."""
        try:
            return cls(label)
        except ValueError:
            return None


@dataclass(frozen=True)
class MentionPost:
    """The social-media post a command refers to."""
    text: str
    media_urls: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, value: Any) -> "MentionPost":
        """
        Accept either plain post text or a post object exposing ``media_urls``.

        A string holding a JSON object is decoded the same way as a mapping;
        any other string is used verbatim as the post text.
        """
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("{"):
                try:
                    decoded = json.loads(stripped)
                except json.JSONDecodeError:
                    decoded = None
                if isinstance(decoded, dict):
                    return cls._from_mapping(decoded, fallback_text=value)
            return cls(text=value)

        if isinstance(value, dict):
            return cls._from_mapping(value, fallback_text=json.dumps(value))

        return cls(text=str(value))

    @classmethod
    def _from_mapping(cls, data: Dict[str, Any], *, fallback_text: str) -> "MentionPost":
        text = data.get("text") or data.get("full_text") or fallback_text
        media = data.get("media_urls") or []
        if isinstance(media, str):
            media = [media]
        return cls(
            text=str(text),
            media_urls=[str(url) for url in media if url],
        )


@dataclass(frozen=True)
class ClassificationRequest:
    command: str
    original_context: str


@dataclass(frozen=True)
class DispatchRequest:
    """Everything the dispatcher needs for one outbound call."""
    category: Category
    command: str
    original_context: str
    attachment: Optional[bytes] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class MentionResult:
    """Outcome of one processed mention."""
    success: bool
    category: Optional[Category] = None
    result: Any = None
    raw_label: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "category": self.category.value if self.category else None,
            "result": self.result,
        }
