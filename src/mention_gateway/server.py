from __future__ import annotations

import json
from typing import Any, Dict, Optional

from fastmcp import FastMCP
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request
from starlette.responses import JSONResponse

from mention_gateway.config import GatewayConfig
from mention_gateway.errors import GatewayError, ValidationError
from mention_gateway.observability.logger import (
    bind_request_id,
    configure_logging,
    get_logger,
    new_request_id,
)
from mention_gateway.router.orchestrator import MentionOrchestrator

configure_logging()
logger = get_logger("mention_gateway.server")


async def _read_body(request: Request) -> Dict[str, Any]:
    """
    Decode a JSON, url-encoded or multipart (fields only) request body.

    Raises:
        ValueError: the body cannot be decoded into a mapping
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        try:
            form = await request.form()
        except (HTTPException, MultiPartException) as e:
            raise ValueError(f"Unreadable form body: {e}") from e
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    body = json.loads(raw)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


class MentionGatewayServer:
    """
    HTTP + MCP surface for the mention gateway.

    Routes:
      - POST /process-mention: classify a bot mention and forward it to its backend
      - GET  /health: liveness check

    Tools:
      - process_mention: same flow as the HTTP route, for MCP clients

    Env:
      - HOST, PORT (default 0.0.0.0:3000)
      - DJANGO_BASE_URL, GPT_API_KEY, CLASSIFIER_* (see GatewayConfig)
    """

    def __init__(
        self,
        *,
        name: str = "mention-gateway",
        config: Optional[GatewayConfig] = None,
        orchestrator: Optional[MentionOrchestrator] = None,
    ) -> None:
        self.config = config or GatewayConfig.from_env()
        self.orchestrator = orchestrator or MentionOrchestrator(self.config)

        self.mcp = FastMCP(name)
        self._register()

    async def handle_process_mention(self, request: Request) -> JSONResponse:
        with bind_request_id(new_request_id()):
            try:
                body = await _read_body(request)
            except ValueError as e:
                logger.warning(f"Malformed request body: {e}")
                return JSONResponse({"error": "Malformed request body", "details": str(e)}, status_code=400)

            try:
                result = await self.orchestrator.process_mention(
                    body.get("userCommand"),
                    body.get("originalTweet"),
                )
                return JSONResponse(result.to_response())
            except ValidationError as e:
                return JSONResponse({"error": str(e)}, status_code=e.status_code)
            except GatewayError as e:
                logger.error(f"Error processing mention: {e}")
                return JSONResponse(
                    {"error": "Error processing mention", "details": str(e)},
                    status_code=e.status_code,
                )
            except Exception as e:
                logger.exception(f"Something went wrong: {e}")
                return JSONResponse(
                    {"error": "Something went wrong!", "details": str(e)},
                    status_code=500,
                )

    # -----------------------------
    # HTTP + MCP API
    # -----------------------------
    def _register(self) -> None:
        @self.mcp.custom_route("/process-mention", methods=["POST"])
        async def process_mention_route(request: Request) -> JSONResponse:
            return await self.handle_process_mention(request)

        @self.mcp.custom_route("/health", methods=["GET"])
        async def health_check(request: Request) -> JSONResponse:
            return JSONResponse({"status": "ok", "service": "mention-gateway"})

        @self.mcp.tool
        async def process_mention(user_command: str, original_tweet: str, uuid: str = None) -> dict[str, Any]:
            """
            Classify a bot mention and forward it to the matching backend capability.

            Args:
              user_command: the command addressed to the bot (e.g. "is this true?")
              original_tweet: post text, or a JSON object with text and media_urls
            """
            with bind_request_id(uuid or new_request_id()):
                logger.info("tool_call process_mention")
                result = await self.orchestrator.process_mention(user_command, original_tweet)
                return result.to_response()

    # -----------------------------
    # run
    # -----------------------------
    def run(self) -> None:
        logger.info(f"Mention gateway running on port {self.config.port}")
        self.mcp.run(transport="http", host=self.config.host, port=self.config.port)


def main() -> None:
    MentionGatewayServer().run()


if __name__ == "__main__":
    main()
