"""
Process-wide configuration for the mention gateway.
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

import dotenv

from .models import Category

dotenv.load_dotenv()


DEFAULT_BACKEND_BASE_URL = "http://localhost:8000"
DEFAULT_PORT = 3000

DEFAULT_ENDPOINTS: Mapping[Category, str] = MappingProxyType({
    Category.SCREENSHOT_RESEARCH: "/api/analyze/",
    Category.IMPERSONATION: "/api/generate/",
    Category.VIRAL_THREAD: "/api/generate-thread/",
    Category.FACT_CHECKER: "/api/fact-check/",
    Category.SENTIMENT: "/api/analyze-tweet/",
    Category.MEME_CREATOR: "/api/generate-meme/",
    Category.GENERIC: "/api/process-tweet/",
})


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable gateway settings, built once at startup and passed explicitly."""
    # Backend capability services
    backend_base_url: str = DEFAULT_BACKEND_BASE_URL
    endpoints: Mapping[Category, str] = field(default_factory=lambda: DEFAULT_ENDPOINTS)

    # Completion service used for classification
    classifier_provider: str = "openai"  # openai, ollama
    classifier_model: str = "gpt-3.5-turbo-instruct"
    classifier_base_url: Optional[str] = None
    classifier_temperature: float = 0.3
    api_key: Optional[str] = None

    # Inbound HTTP
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    def __post_init__(self):
        # Freeze a caller-supplied dict so the table stays read-only.
        if not isinstance(self.endpoints, MappingProxyType):
            object.__setattr__(self, "endpoints", MappingProxyType(dict(self.endpoints)))
        object.__setattr__(self, "backend_base_url", self.backend_base_url.rstrip("/"))

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self.backend_base_url}{endpoint}"

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """
        Build the configuration from environment variables (and a local .env file).

        Raises:
            ValueError: if PORT or CLASSIFIER_TEMPERATURE is not numeric
        """
        port_raw = _env("PORT", str(DEFAULT_PORT))
        temperature_raw = _env("CLASSIFIER_TEMPERATURE", "0.3")
        try:
            port = int(port_raw)
        except ValueError as e:
            raise ValueError(f"Invalid PORT: {port_raw!r}") from e
        try:
            temperature = float(temperature_raw)
        except ValueError as e:
            raise ValueError(f"Invalid CLASSIFIER_TEMPERATURE: {temperature_raw!r}") from e

        return cls(
            backend_base_url=_env("DJANGO_BASE_URL", DEFAULT_BACKEND_BASE_URL),
            classifier_provider=_env("CLASSIFIER_PROVIDER", "openai").lower(),
            classifier_model=_env("CLASSIFIER_MODEL", "gpt-3.5-turbo-instruct"),
            classifier_base_url=_env("CLASSIFIER_BASE_URL"),
            classifier_temperature=temperature,
            api_key=_env("GPT_API_KEY") or _env("OPENAI_API_KEY"),
            host=_env("HOST", "0.0.0.0"),
            port=port,
        )
