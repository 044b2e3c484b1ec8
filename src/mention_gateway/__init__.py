"""Mention gateway: classify bot commands and route them to backend capability services."""

__version__ = "0.1.0"

from .config import GatewayConfig
from .models import Category, DispatchRequest, MentionPost, MentionResult
from .router import CommandClassifier, Dispatcher, MediaFetcher, MentionOrchestrator

__all__ = [
    "Category",
    "CommandClassifier",
    "DispatchRequest",
    "Dispatcher",
    "GatewayConfig",
    "MediaFetcher",
    "MentionOrchestrator",
    "MentionPost",
    "MentionResult",
]
