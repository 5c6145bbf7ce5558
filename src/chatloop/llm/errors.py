"""LLM-specific error hierarchy.

All LLM errors inherit from ChatloopError for consistent exception handling.
Transport, API and decode failures are fatal to the current request or
stream; callers branch on the class and, for API errors, on ``status_code``.
"""

from __future__ import annotations

from chatloop.exceptions import ChatloopError


class LLMClientError(ChatloopError):
    """Base for all LLM client errors."""


class LLMConfigError(LLMClientError):
    """Missing or invalid LLM configuration (e.g., no API key)."""


class LLMTransportError(LLMClientError):
    """Connection-level failure, or a non-success status on a stream.

    Attributes:
        status_code: HTTP status when the server answered, else None.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class StreamTruncatedError(LLMTransportError):
    """The event stream closed before the ``[DONE]`` sentinel arrived."""

    def __init__(self, message: str = "Stream ended before [DONE] sentinel") -> None:
        super().__init__(message)


class LLMAPIError(LLMClientError):
    """The API reported an error, either via status code or an error body.

    Attributes:
        status_code: HTTP status code (400 for errors embedded in a 2xx body).
        message: Human-readable message from the API.
        error_type: The ``error.type`` field, if the API sent one.
        error_code: The ``error.code`` field, if the API sent one.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str | None = None,
        error_code: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.error_code = error_code
        super().__init__(message)


class LLMAuthError(LLMAPIError):
    """Authentication failed (401/403)."""


class LLMRateLimitError(LLMAPIError):
    """Rate limited by the API (429).

    Attributes:
        retry_after: Seconds to wait before retrying (from Retry-After header),
            or None if not provided.
    """

    def __init__(
        self,
        message: str = "Rate limited",
        retry_after: float | None = None,
        error_type: str | None = None,
        error_code: str | None = None,
    ) -> None:
        self.retry_after = retry_after
        if retry_after is not None:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(429, message, error_type, error_code)


class LLMResponseError(LLMClientError):
    """Unexpected response format from LLM API."""


class StreamDecodeError(LLMClientError):
    """A ``data:`` line of the event stream was not valid JSON.

    Attributes:
        raw: The offending payload text (without the ``data: `` prefix).
    """

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Failed to parse JSON chunk: {raw}")
