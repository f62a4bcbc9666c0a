"""
Error models for the WhatsApp Cloud API pipeline.

Two families live here:
- The provider error envelope, i.e. the `{"error": {...}}` body Graph API
  returns on failure.
- The closed ApiError taxonomy every request resolves to on failure, and the
  ApiResult wrapper that carries either a decoded value or one ApiError.
"""

from typing import Annotated, Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

T = TypeVar("T")


class ProviderErrorData(BaseModel):
    """Additional `error_data` blob attached to a provider error."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    messaging_product: str | None = Field(None, description="Always 'whatsapp'")
    details: str | None = Field(None, description="Detailed error description")


class ProviderErrorBody(BaseModel):
    """Error object inside the provider envelope."""

    model_config = ConfigDict(extra="allow")

    message: str | None = Field(None, description="Error message")
    type: str | None = Field(None, description="Error type, e.g. OAuthException")
    code: int = Field(..., description="Graph API error code")
    error_subcode: int | None = Field(None, description="Error subcode")
    error_user_title: str | None = Field(None, description="User facing title")
    error_user_msg: str | None = Field(None, description="User facing message")
    fbtrace_id: str | None = Field(None, description="Facebook trace ID")
    error_data: ProviderErrorData | None = Field(
        None, description="Additional error data"
    )

    @field_validator("error_data", mode="before")
    @classmethod
    def lenient_error_data(cls, v: Any) -> Any:
        """A bare string becomes the details; other non-object values are dropped."""
        if v is None or isinstance(v, dict):
            return v
        if isinstance(v, str):
            return {"details": v}
        return None

    @property
    def details(self) -> str | None:
        """Most specific human readable detail available."""
        if self.error_data and self.error_data.details:
            return self.error_data.details
        return self.error_user_msg


class ErrorEnvelope(BaseModel):
    """Provider failure envelope: `{"error": {...}}`."""

    model_config = ConfigDict(extra="allow")

    error: ProviderErrorBody


# ================================================================
# ApiError taxonomy
# ================================================================


class BaseApiError(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str = Field(..., description="Human readable failure message")
    http_status: int | None = Field(None, description="HTTP status, when one exists")

    @property
    def retryable(self) -> bool:
        """Whether retrying the same call later may succeed."""
        return False

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.message}"


class AuthenticationFailed(BaseApiError):
    """Invalid or expired access token, or missing permission."""

    kind: Literal["authentication_failed"] = "authentication_failed"
    code: int | None = None


class RateLimited(BaseApiError):
    """The provider is throttling this caller; back off and retry."""

    kind: Literal["rate_limited"] = "rate_limited"
    code: int | None = None
    retry_after: float | None = Field(
        None, description="Seconds to wait, from the Retry-After header"
    )

    @property
    def retryable(self) -> bool:
        return True


class ValidationFailed(BaseApiError):
    """The provider rejected the request parameters."""

    kind: Literal["validation_failed"] = "validation_failed"
    code: int | None = None
    subcode: int | None = None
    details: str | None = None


class ProviderError(BaseApiError):
    """Any other provider error; original code and message are preserved."""

    kind: Literal["provider_error"] = "provider_error"
    code: int
    subcode: int | None = None
    error_type: str | None = None
    details: str | None = None
    fbtrace_id: str | None = None
    transient: bool = Field(
        False, description="Provider side failure that may clear on its own"
    )

    @property
    def retryable(self) -> bool:
        return self.transient


class TransportFailure(BaseApiError):
    """Network level failure: connection refused, DNS, timeout."""

    kind: Literal["transport_failure"] = "transport_failure"
    timed_out: bool = False

    @property
    def retryable(self) -> bool:
        return True


class DecodeFailure(BaseApiError):
    """A response or webhook body could not be parsed into its expected shape."""

    kind: Literal["decode_failure"] = "decode_failure"
    body: str | None = Field(None, description="Raw body text, when available")


ApiError = Annotated[
    Union[
        AuthenticationFailed,
        RateLimited,
        ValidationFailed,
        ProviderError,
        TransportFailure,
        DecodeFailure,
    ],
    Field(discriminator="kind"),
]


class ApiResultError(Exception):
    """Raised by ApiResult.unwrap() when the result holds an ApiError."""

    def __init__(self, error: BaseApiError):
        self.error = error
        super().__init__(str(error))


class ApiResult(BaseModel, Generic[T]):
    """Outcome of a fallible operation: a decoded value or one ApiError.

    Example:
        result = await client.execute("POST", "messages", MessageResponse, body=payload)
        if result.success:
            print(result.value.message_id)
        elif isinstance(result.error, RateLimited):
            await asyncio.sleep(result.error.retry_after or 1)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T | None = None
    error: ApiError | None = None

    @model_validator(mode="after")
    def validate_exclusive(self):
        """A result cannot be both a success and a failure."""
        if self.value is not None and self.error is not None:
            raise ValueError("ApiResult cannot hold both a value and an error")
        return self

    @classmethod
    def ok(cls, value: Any) -> "ApiResult":
        return cls(value=value)

    @classmethod
    def fail(cls, error: BaseApiError) -> "ApiResult":
        return cls(error=error)

    @property
    def success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise ApiResultError carrying the failure."""
        if self.error is not None:
            raise ApiResultError(self.error)
        return self.value
