"""Logging setup for the gateway, with a per-mention request id on every line.

Environment:
  - MENTION_GATEWAY_LOG_LEVEL: level name (default INFO)
  - MENTION_GATEWAY_LOG_TO_FILE: also write to ``<LOG_DIR>/<name>.log``
  - MENTION_GATEWAY_LOG_DIR, MENTION_GATEWAY_PROCESS_NAME, MENTION_GATEWAY_LOG_APPEND
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Iterator, List, Optional


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"

_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "mention_gateway_request_id",
    default=None,
)

_configured = False


class RequestIdFilter(logging.Filter):
    """Stamps ``record.request_id`` with the bound id, or ``-`` outside a mention."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_var.get() or "-"
        return True


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def level_from_env(default: int = logging.INFO) -> int:
    name = os.getenv("MENTION_GATEWAY_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def log_file_path() -> Optional[Path]:
    """Where file logging goes, or None when it is switched off."""
    if not _env_flag("MENTION_GATEWAY_LOG_TO_FILE"):
        return None
    log_dir = Path(os.getenv("MENTION_GATEWAY_LOG_DIR", "logs")).expanduser()
    basename = os.getenv("MENTION_GATEWAY_PROCESS_NAME", "").strip() or "mention_gateway"
    return log_dir / f"{basename}.log"


def build_handlers(level: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    path = log_file_path()
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = "a" if _env_flag("MENTION_GATEWAY_LOG_APPEND", default=True) else "w"
        handlers.append(logging.FileHandler(path, mode=mode, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(RequestIdFilter())
    return handlers


def configure_logging(*, level: int = logging.INFO) -> None:
    """Attach the gateway handlers to the root logger; later calls are no-ops."""
    global _configured
    if _configured:
        return

    level = level_from_env(level)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in build_handlers(level):
        root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)


def new_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> Optional[str]:
    return _request_id_var.get()


@contextlib.contextmanager
def bind_request_id(request_id: Optional[str]) -> Iterator[None]:
    """Tag every log line emitted inside the block with ``request_id``."""
    token = _request_id_var.set(request_id)
    try:
        yield
    finally:
        _request_id_var.reset(token)
