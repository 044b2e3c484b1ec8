from typing import Any, Dict, List, Optional

import requests

from mention_gateway.router.classifier import CompletionProvider


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        text: str = "",
        content: bytes = b"",
    ):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text
        self.content = content

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("No JSON body")
        return self._json_data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeHttp:
    """Stands in for the requests module; records calls and replays queued responses or errors."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.posts: List[Dict[str, Any]] = []
        self.gets: List[str] = []

    def _next(self) -> FakeResponse:
        item = self.responses.pop(0) if self.responses else FakeResponse(json_data={})
        if isinstance(item, Exception):
            raise item
        return item

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.posts.append({"url": url, **kwargs})
        return self._next()

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.gets.append(url)
        return self._next()


class StubProvider(CompletionProvider):
    """Completion provider returning a fixed completion."""

    def __init__(self, completion: str = "Generic", error: Optional[Exception] = None):
        self.completion = completion
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.completion
