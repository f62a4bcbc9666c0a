"""WhatsApp models package."""

from .basic_models import (
    BasicTextMessage,
    ContactInfo,
    MessageInfo,
    MessageResponse,
    SuccessResponse,
)
from .error_models import (
    ApiError,
    ApiResult,
    ApiResultError,
    AuthenticationFailed,
    BaseApiError,
    DecodeFailure,
    ErrorEnvelope,
    ProviderError,
    ProviderErrorBody,
    RateLimited,
    TransportFailure,
    ValidationFailed,
)
from .interactive_models import (
    ButtonMessage,
    ListMessage,
    ListRow,
    ListSection,
    ReplyButton,
)
from .media_models import MediaType, MediaUploadResponse, MediaUrlResponse

__all__ = [
    # Responses
    "MessageResponse",
    "ContactInfo",
    "MessageInfo",
    "SuccessResponse",
    "MediaUploadResponse",
    "MediaUrlResponse",
    # Requests
    "BasicTextMessage",
    "ButtonMessage",
    "ReplyButton",
    "ListMessage",
    "ListSection",
    "ListRow",
    "MediaType",
    # Errors
    "ApiError",
    "ApiResult",
    "ApiResultError",
    "BaseApiError",
    "AuthenticationFailed",
    "RateLimited",
    "ValidationFailed",
    "ProviderError",
    "TransportFailure",
    "DecodeFailure",
    "ErrorEnvelope",
    "ProviderErrorBody",
]
