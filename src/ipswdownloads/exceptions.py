"""
Custom exceptions for ipswdownloads.

Errors raised by the package itself inherit from IPSWDownloadsError so callers
can catch everything application-specific in one place.
"""


class IPSWDownloadsError(Exception):
    """
    Base exception for all ipswdownloads errors.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Validation Errors
# =============================================================================


class InvalidURL(IPSWDownloadsError):
    """
    Exception raised when a string is not a valid absolute URL.

    Attributes:
        raw: The offending value, exactly as received.
    """

    def __init__(self, raw: object, details: str | None = None) -> None:
        super().__init__(f"Invalid URL: {raw!r}", details)
        self.raw = raw


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(IPSWDownloadsError):
    """
    Exception raised when configuration is invalid.

    This includes:
    - Unknown configuration keys
    - Invalid configuration values
    """

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when a configuration file cannot be read or parsed."""

    def __init__(
        self, message: str, path: str | None = None, details: str | None = None
    ) -> None:
        super().__init__(message, details)
        self.path = path


# =============================================================================
# Upstream Errors
# =============================================================================


class APIError(IPSWDownloadsError):
    """
    Exception raised for errors reported by, or decoding, the upstream service.

    Attributes:
        endpoint: The API operation or path that was accessed.
        status_code: The HTTP status code returned, if any.
    """

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        """
        Initialize the API exception.

        Args:
            message: The primary error message.
            endpoint: The API endpoint that was accessed.
            status_code: The HTTP status code returned.
            details: Optional additional context.
        """
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class UnexpectedResponseError(APIError):
    """Exception raised when an operation returns a non-success status."""

    def __init__(
        self,
        status_code: int,
        endpoint: str | None = None,
        body_excerpt: str | None = None,
    ) -> None:
        super().__init__(
            f"Unexpected HTTP status {status_code}",
            endpoint=endpoint,
            status_code=status_code,
            details=body_excerpt or None,
        )
        self.body_excerpt = body_excerpt


class ResponseDecodingError(APIError):
    """
    Exception raised when a response body does not match the expected schema.

    Attributes:
        field: Dotted path of the field that failed to decode, if known.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        endpoint: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, endpoint=endpoint, details=details)
        self.field = field


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(IPSWDownloadsError):
    """
    Exception raised when the network exchange itself fails.

    Attributes:
        url: The request URL that failed, if known.
        is_retryable: Whether the failure could succeed on a later attempt.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        is_retryable: bool = False,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.is_retryable = is_retryable
