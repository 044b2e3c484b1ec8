"""
Dispatcher that forwards a classified mention to its backend capability service.
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

import requests

from mention_gateway.config import GatewayConfig
from mention_gateway.errors import DispatchTransportError, InvalidCategoryError
from mention_gateway.models import DispatchRequest
from mention_gateway.observability.logger import get_logger
from .payloads import OutboundPayload, PayloadBuilderFactory, Transport


class Dispatcher:
    """Builds the category-specific request and sends exactly one outbound call."""

    def __init__(self, config: GatewayConfig, http: Any = requests):
        self.config = config
        # Module-level requests calls: no cookie jar survives between mentions.
        self.http = http
        self.logger = get_logger("mention_gateway.router.dispatcher")

    def resolve_url(self, request: DispatchRequest) -> str:
        endpoint = self.config.endpoints.get(request.category)
        if not endpoint:
            raise InvalidCategoryError(getattr(request.category, "value", str(request.category)))
        return self.config.endpoint_url(endpoint)

    @staticmethod
    def build_payload(request: DispatchRequest) -> OutboundPayload:
        return PayloadBuilderFactory.create(request.category).build(request)

    @staticmethod
    def _multipart_files(payload: OutboundPayload) -> Dict[str, Tuple[Any, ...]]:
        # Plain fields go in as filename-less parts so the body is multipart
        # even when no attachment is present.
        parts: Dict[str, Tuple[Any, ...]] = {
            name: (None, str(value)) for name, value in payload.fields.items()
        }
        parts.update(payload.files)
        return parts

    def _send(self, url: str, payload: OutboundPayload) -> requests.Response:
        if payload.transport == Transport.MULTIPART:
            return self.http.post(url, files=self._multipart_files(payload))
        return self.http.post(url, json=payload.fields)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    async def dispatch(self, request: DispatchRequest) -> Any:
        """
        Send the mention to the backend handler of its category.

        Args:
            request: Classified mention with optional attachment and metadata

        Returns:
            The decoded response body, passed through unmodified

        Raises:
            InvalidCategoryError: no endpoint is configured for the category
            DispatchTransportError: transport failure or non-2xx response
        """
        url = self.resolve_url(request)
        payload = self.build_payload(request)
        self.logger.info(f"Forwarding {request.category.value} request to {url} ({payload.transport.value})")

        try:
            response = await asyncio.to_thread(self._send, url, payload)
            response.raise_for_status()
        except requests.RequestException as e:
            status = e.response.status_code if e.response is not None else None
            self.logger.error(f"Error forwarding to backend: {e}")
            raise DispatchTransportError(f"Backend call to {url} failed: {e}", status_code=status) from e

        self.logger.info(f"Backend responded with status {response.status_code}")
        return self._decode(response)
