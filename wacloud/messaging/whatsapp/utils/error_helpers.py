"""
WhatsApp error classification utilities.

Maps the provider error envelope (plus the HTTP status it arrived with) onto the
closed ApiError taxonomy. classify_error is pure and total: every input yields
exactly one ApiError and nothing here raises.

Code reference: https://developers.facebook.com/docs/whatsapp/cloud-api/support/error-codes
"""

from typing import Any

from pydantic import ValidationError

from wacloud.messaging.whatsapp.models.error_models import (
    AuthenticationFailed,
    BaseApiError,
    ErrorEnvelope,
    ProviderError,
    ProviderErrorBody,
    RateLimited,
    ValidationFailed,
)

# Authorization and permission errors
AUTH_ERROR_CODES = frozenset({0, 10, 102, 190})
PERMISSION_ERROR_RANGE = range(200, 300)

# Throttling errors
RATE_LIMIT_ERROR_CODES = frozenset(
    {4, 17, 32, 613, 80007, 130429, 131048, 131056, 133016}
)

# Parameter, recipient and template errors
VALIDATION_ERROR_CODES = frozenset(
    {
        100,  # Invalid parameter
        131008,  # Required parameter is missing
        131009,  # Parameter value is not valid
        131021,  # Recipient cannot be sender
        131026,  # Message undeliverable
        131047,  # Re-engagement message outside the 24h window
        131051,  # Unsupported message type
        131052,  # Media download error
        131053,  # Media upload error
        132000,  # Template param count mismatch
        132001,  # Template does not exist
        132005,  # Template hydrated text too long
        132007,  # Template format character policy violated
        132012,  # Template parameter format mismatch
        132015,  # Template is paused
        132016,  # Template is disabled
        133010,  # Phone number not registered
        135000,  # Generic user error
    }
)

# Provider side failures that usually clear on their own
TRANSIENT_ERROR_CODES = frozenset({1, 2, 131000, 131016, 133004})

# Authentication messages cannot be sent to business scoped user IDs
ERROR_CODE_BSUID_AUTH_NOT_ALLOWED = 131062


def parse_error_envelope(data: Any) -> ErrorEnvelope | None:
    """Parse a decoded JSON body as a provider error envelope.

    Returns:
        The envelope, or None when the body does not have the envelope shape
    """
    if not isinstance(data, dict):
        return None
    try:
        return ErrorEnvelope.model_validate(data)
    except ValidationError:
        return None


def is_authentication_code(code: int) -> bool:
    return code in AUTH_ERROR_CODES or code in PERMISSION_ERROR_RANGE


def is_rate_limit_code(code: int) -> bool:
    return code in RATE_LIMIT_ERROR_CODES


def is_validation_code(code: int) -> bool:
    return code in VALIDATION_ERROR_CODES or code == ERROR_CODE_BSUID_AUTH_NOT_ALLOWED


def is_transient_code(code: int) -> bool:
    return code in TRANSIENT_ERROR_CODES


def classify_error(
    envelope: ErrorEnvelope | ProviderErrorBody,
    http_status: int | None = None,
    retry_after: float | None = None,
) -> BaseApiError:
    """Classify a provider error into the ApiError taxonomy.

    Known codes win over the HTTP status; the status only decides between
    categories for codes this module does not enumerate.

    Args:
        envelope: Parsed provider envelope or the inner error object
        http_status: HTTP status the envelope arrived with, if any
        retry_after: Seconds from a Retry-After header, if any

    Returns:
        Exactly one ApiError variant
    """
    err = envelope.error if isinstance(envelope, ErrorEnvelope) else envelope
    code = err.code
    message = err.message or err.error_user_msg or f"Graph API error {code}"

    if is_rate_limit_code(code):
        return RateLimited(
            message=message,
            http_status=http_status,
            code=code,
            retry_after=retry_after,
        )
    if is_authentication_code(code):
        return AuthenticationFailed(message=message, http_status=http_status, code=code)
    if is_validation_code(code):
        return ValidationFailed(
            message=message,
            http_status=http_status,
            code=code,
            subcode=err.error_subcode,
            details=err.details,
        )

    if not is_transient_code(code):
        if http_status == 429:
            return RateLimited(
                message=message,
                http_status=http_status,
                code=code,
                retry_after=retry_after,
            )
        if http_status == 401:
            return AuthenticationFailed(
                message=message, http_status=http_status, code=code
            )
        if http_status == 400:
            return ValidationFailed(
                message=message,
                http_status=http_status,
                code=code,
                subcode=err.error_subcode,
                details=err.details,
            )

    transient = is_transient_code(code) or (
        http_status is not None and http_status >= 500
    )
    return ProviderError(
        message=message,
        http_status=http_status,
        code=code,
        subcode=err.error_subcode,
        error_type=err.type,
        details=err.details,
        fbtrace_id=err.fbtrace_id,
        transient=transient,
    )


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds."""
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None
