"""Rich-based logging with tenant and user context."""

from .context import (
    clear_request_context,
    get_context_info,
    get_current_tenant_context,
    get_current_user_context,
    set_request_context,
)
from .logger import (
    ContextLogger,
    get_logger,
    get_webhook_logger,
    setup_app_logging,
    setup_logging,
)

__all__ = [
    "ContextLogger",
    "get_logger",
    "get_webhook_logger",
    "setup_logging",
    "setup_app_logging",
    "set_request_context",
    "clear_request_context",
    "get_context_info",
    "get_current_tenant_context",
    "get_current_user_context",
]
