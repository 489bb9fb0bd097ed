# src/breed_fetch/errors.py
from typing import Optional

REMOTE_FAILURE_MESSAGE = "Failed to retrieve image"


class BreedFetchError(Exception):
    """Base class for every failure a breed-fetch run can report.

    Each stage (prompt, fetch, extract, persist) raises a subclass of this
    error, so callers need exactly one handler and one way to read the
    human-readable text: the ``message`` attribute.

    Examples:
        >>> try:
        ...     await run_pipeline(settings, session)
        ... except BreedFetchError as e:
        ...     print(e.message)
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(BreedFetchError):
    """Raised when settings cannot be loaded or are invalid."""

    pass


class PromptError(BreedFetchError):
    """Raised when the interactive prompt cannot produce a line."""

    pass


class RemoteFetchError(BreedFetchError):
    """Raised when the remote API answers with a status other than 200.

    The message is fixed regardless of status or body.
    """

    def __init__(
        self,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(REMOTE_FAILURE_MESSAGE)
        self.status_code = status_code
        self.url = url


class NetworkError(BreedFetchError):
    """Raised for transport failures (DNS, refused connection, TLS)."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ConnectionTimeoutError(NetworkError):
    """Raised when an opt-in request timeout expires."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout: Optional[float] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, url=url)
        self.timeout = timeout


class ResponseError(BreedFetchError):
    """Base class for response body problems."""

    def __init__(self, message: str, content: Optional[str] = None):
        super().__init__(message)
        self.content = content


class JSONParseError(ResponseError):
    """Raised when the response body is not valid JSON."""

    pass


class InvalidResponseFormatError(ResponseError):
    """Raised if the payload does not have the expected shape."""

    pass


class MissingFieldError(InvalidResponseFormatError):
    """Raised when the payload lacks the field to extract."""

    def __init__(self, field: str, content: Optional[str] = None):
        super().__init__(
            f"Response did not include a '{field}' field", content=content
        )
        self.field = field


class ResponseBufferError(BreedFetchError):
    """Base class for response buffer errors."""

    pass


class ClosedBufferError(ResponseBufferError):
    """Raised when attempting to write to a closed buffer."""

    pass


class BufferOverflowError(ResponseBufferError):
    """Raised when the buffer exceeds its size limit."""

    def __init__(self, message: str, limit: Optional[int] = None):
        super().__init__(message)
        self.limit = limit


class FileWriteError(BreedFetchError):
    """Raised when the output file cannot be written."""

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"Could not write file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.path = path
        self.reason = reason
