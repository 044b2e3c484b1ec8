"""
Command classification and routing for bot mentions.

This package provides:
- A classifier that labels a free-form command with one capability category
- A media fetcher for the attachment of the referenced post
- Table-driven payload builders and a dispatcher for the backend services
- The orchestrator that runs the per-mention flow
"""

from .classifier import (
    CommandClassifier,
    CompletionProvider,
    OllamaCompletionProvider,
    OpenAICompletionProvider,
)
from .dispatcher import Dispatcher
from .media import MediaFetcher, extract_media_locations
from .orchestrator import MentionOrchestrator, MentionState
from .payloads import OutboundPayload, PayloadBuilder, PayloadBuilderFactory, Transport

__all__ = [
    "CommandClassifier",
    "CompletionProvider",
    "Dispatcher",
    "MediaFetcher",
    "MentionOrchestrator",
    "MentionState",
    "OllamaCompletionProvider",
    "OpenAICompletionProvider",
    "OutboundPayload",
    "PayloadBuilder",
    "PayloadBuilderFactory",
    "Transport",
    "extract_media_locations",
]
