"""
Logging context management using contextvars.

The tenant is the business phone number ID a request or webhook belongs to and
the user is the WhatsApp ID of the end user. Both propagate automatically
through the current asyncio task, so concurrent webhook deliveries never see
each other's context.
"""

from contextvars import ContextVar

_tenant_context: ContextVar[str | None] = ContextVar("tenant_id", default=None)
_user_context: ContextVar[str | None] = ContextVar("user_id", default=None)


def set_request_context(
    tenant_id: str | None = None,
    user_id: str | None = None,
) -> None:
    """
    Set the logging context for the current async context.

    Args:
        tenant_id: Business phone number ID
        user_id: End user WhatsApp ID
    """
    if tenant_id is not None:
        _tenant_context.set(tenant_id)
    if user_id is not None:
        _user_context.set(user_id)


def get_current_tenant_context() -> str | None:
    """Get the current tenant ID, or None if not set."""
    return _tenant_context.get()


def get_current_user_context() -> str | None:
    """Get the current user ID, or None if not set."""
    return _user_context.get()


def clear_request_context() -> None:
    """
    Clear the logging context.

    Context is isolated per task already; this is mostly useful in tests.
    """
    _tenant_context.set(None)
    _user_context.set(None)


def get_context_info() -> dict[str, str | None]:
    """Get current context information for debugging."""
    return {
        "tenant_id": get_current_tenant_context(),
        "user_id": get_current_user_context(),
    }
