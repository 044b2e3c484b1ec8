"""
Command classifier mapping free-form commands onto a capability category
using an external text-completion service.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests
from openai import AsyncOpenAI

from mention_gateway.config import GatewayConfig
from mention_gateway.errors import ClassificationError
from mention_gateway.models import Category, ClassificationRequest
from mention_gateway.observability.logger import get_logger
from mention_gateway.templates.prompts import CommandClassificationTemplate, PromptTemplate


class CompletionProvider(ABC):
    """Abstract base class for text-completion providers."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Return the raw completion text for a prompt."""
        pass


class OpenAICompletionProvider(CompletionProvider):
    """OpenAI completions endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-3.5-turbo-instruct",
        temperature: float = 0.3,
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.logger = get_logger("mention_gateway.router.openai_provider")

        if client is None:
            client_kwargs = {"api_key": api_key}
            if base_url:
                client_kwargs["base_url"] = base_url
            client = AsyncOpenAI(**client_kwargs)
        self._client = client

    async def complete(self, prompt: str) -> str:
        self.logger.debug(f"Requesting completion from OpenAI model: {self.model}")
        response = await self._client.completions.create(
            model=self.model,
            prompt=prompt,
            temperature=self.temperature,
        )
        if not response.choices:
            raise ValueError("OpenAI returned no completion choices")
        return response.choices[0].text or ""


class OllamaCompletionProvider(CompletionProvider):
    """Ollama local LLM provider."""

    def __init__(
        self,
        model: str = "llama3.1",
        base_url: str = "http://localhost:11434",
        temperature: float = 0.3,
        http: Any = requests,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.http = http
        self.logger = get_logger("mention_gateway.router.ollama_provider")

    def _generate(self, prompt: str) -> str:
        response = self.http.post(
            f"{self.base_url}/api/generate",
            json={
                "model": self.model,
                "prompt": prompt,
                "stream": False,
                "options": {
                    "temperature": self.temperature,
                    "num_predict": 32,
                },
            },
        )
        if response.status_code != 200:
            self.logger.error(f"Ollama request failed with status {response.status_code}: {response.text}")
            raise RuntimeError(f"Ollama request failed: {response.text}")
        return response.json()["response"]

    async def complete(self, prompt: str) -> str:
        self.logger.debug(f"Requesting completion from Ollama model: {self.model}")
        return await asyncio.to_thread(self._generate, prompt)


def create_provider(config: GatewayConfig) -> CompletionProvider:
    """Create the completion provider named by the configuration."""
    provider = config.classifier_provider.lower()

    if provider == "openai":
        return OpenAICompletionProvider(
            api_key=config.api_key,
            model=config.classifier_model,
            temperature=config.classifier_temperature,
            base_url=config.classifier_base_url,
        )

    if provider == "ollama":
        return OllamaCompletionProvider(
            model=config.classifier_model,
            base_url=config.classifier_base_url or "http://localhost:11434",
            temperature=config.classifier_temperature,
        )

    raise ValueError(f"Unsupported provider: {config.classifier_provider}. Use 'openai' or 'ollama'")


class CommandClassifier:
    """Classifies a user command into exactly one capability label."""

    def __init__(
        self,
        config: GatewayConfig,
        provider: Optional[CompletionProvider] = None,
        template: Optional[PromptTemplate] = None,
    ):
        self.config = config
        self.provider = provider or create_provider(config)
        self.template = template or CommandClassificationTemplate()
        self.logger = get_logger("mention_gateway.router.classifier")

    async def classify_label(self, request: ClassificationRequest) -> str:
        """
        Ask the completion service for a category label.

        The first non-empty line of the completion is returned trimmed; it is
        not checked against the known categories.

        Raises:
            ClassificationError: the call failed or the completion was empty
        """
        prompt = self.template.render(request.command, request.original_context)

        try:
            completion = await self.provider.complete(prompt)
        except Exception as e:
            self.logger.error(f"Classification call failed: {e}")
            raise ClassificationError(f"Classification failed: {e}") from e

        label = next((line.strip() for line in completion.splitlines() if line.strip()), "")
        if not label:
            self.logger.error("Classification returned an empty completion")
            raise ClassificationError("Classification returned an empty label")

        self.logger.info(f"Command classified as: {label}")
        return label

    def resolve(self, label: str) -> Category:
        """Resolve a raw label, routing unrecognized labels as GENERIC."""
        category = Category.from_label(label)
        if category is None:
            self.logger.warning(f"Unrecognized category label {label!r}; routing as {Category.GENERIC.value}")
            return Category.GENERIC
        return category

    async def classify(self, command: str, original_context: str) -> Category:
        label = await self.classify_label(ClassificationRequest(command, original_context))
        return self.resolve(label)
