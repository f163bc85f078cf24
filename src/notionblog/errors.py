"""Error hierarchy for notionblog.

Every error raised by the Notion API layer inherits from
:class:`NotionBlogError` and carries a machine-readable ``code`` (from
:class:`ErrorCode`), a human-readable ``message``, an optional structured
``context`` dict, and an optional ``cause``.

These errors propagate through the transport and the block tree fetcher.
Only :class:`~notionblog.client.AsyncBlogClient` turns them into empty
results, at its public boundary.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the library can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class NotionBlogError(Exception):
    """Base exception for all notionblog errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Structured diagnostic data.  Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class NotionBlogValidationError(NotionBlogError):
    """Notion returned 400 (or another non-retryable 4xx).

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.VALIDATION_ERROR, message, context, cause)


class NotionBlogAuthError(NotionBlogError):
    """Notion returned 401: the integration token is invalid or expired.

    Context keys: ``status_code``, ``notion_code``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.AUTH_ERROR, message, context, cause)


class NotionBlogPermissionError(NotionBlogError):
    """Notion returned 403: the page or data source is not shared with the integration.

    Context keys: ``status_code``, ``notion_code``, ``operation``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.PERMISSION_ERROR, message, context, cause)


class NotionBlogNotFoundError(NotionBlogError):
    """Notion returned 404: the page, block or data source does not exist.

    Context keys: ``status_code``, ``notion_code``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.NOT_FOUND, message, context, cause)


class NotionBlogRetryExhaustedError(NotionBlogError):
    """Every retry attempt for a retryable request failed.

    Context keys: ``attempts``, ``last_status_code``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.RETRY_EXHAUSTED, message, context, cause)


class NotionBlogNetworkError(NotionBlogError):
    """A transport-level failure (timeout, DNS, connection reset, protocol error).

    Context keys: ``url``, ``attempt``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.NETWORK_ERROR, message, context, cause)


class NotionBlogInvalidResponseError(NotionBlogError):
    """Notion answered 2xx with a body that is not the expected JSON object.

    Typically an intermediary (proxy, captive portal) replaced the response.

    Context keys: ``status_code``, ``path``, ``body_preview``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(ErrorCode.INVALID_RESPONSE, message, context, cause)
