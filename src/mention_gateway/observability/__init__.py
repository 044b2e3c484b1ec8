from .logger import (
    bind_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    new_request_id,
)

__all__ = [
    "bind_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "new_request_id",
]
