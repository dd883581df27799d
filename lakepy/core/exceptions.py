"""
Custom exceptions for DFS storage operations.

Every failure raised by lakepy derives from LakeException so callers can
catch the whole family at once and still tell transport problems apart
from HTTP status failures.
"""
from typing import Optional


class LakeException(Exception):
    """Base exception for all lakepy errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class NetworkFailure(LakeException):
    """Exception raised when a request never produced an HTTP response."""

    def __init__(self, message: str, method: str = '', url: str = '') -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            method: HTTP method of the failed request
            url: Target URL of the failed request
        """
        self.method = method
        self.url = url
        super().__init__(message)


class HttpStatusError(LakeException):
    """Exception raised for non-2xx responses."""

    def __init__(
        self,
        status: int,
        method: str = '',
        url: str = '',
        body: str = ''
    ) -> None:
        """
        Initialize the exception.

        Args:
            status: HTTP status code
            method: HTTP method of the request
            url: Target URL of the request
            body: Response body text (may be empty)
        """
        self.status = status
        self.method = method
        self.url = url
        self.body = body
        super().__init__(f"HTTP {status} for {method} {url}", error_code=status)


class NotFound(HttpStatusError):
    """Exception raised when the addressed path does not exist (404)."""
    pass


class TimeoutExceeded(LakeException):
    """Exception raised when a bounded poll runs out of time."""

    def __init__(self, message: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(message)


class OperationFailedError(LakeException):
    """Exception raised when a polled operation finished in the Failed state."""

    def __init__(self, operation_id: str, reason: str = 'Operation failed') -> None:
        self.operation_id = operation_id
        self.reason = reason
        super().__init__(f"Operation {operation_id} failed: {reason}")


class DuplicatePathError(LakeException):
    """Exception raised when a listing contains the same directory twice."""

    def __init__(self, full_path: str) -> None:
        self.full_path = full_path
        super().__init__(f"Duplicate directory path in listing: {full_path}")


class InvalidContentError(LakeException):
    """Exception raised when binary content is not valid base64."""
    pass


class MalformedResponseError(LakeException):
    """Exception raised when a 2xx response body cannot be interpreted."""

    def __init__(self, message: str, url: str = '') -> None:
        self.url = url
        super().__init__(message)
