"""Error kinds raised by the iDoneThis client."""


class IdonethisError(Exception):
    """Base class for every error raised by this package."""

    pass


class StorageUnavailable(IdonethisError):
    """Raised when the session cache directory cannot be created."""

    pass


class TransportError(IdonethisError):
    """Raised on network failures and unsuccessful HTTP responses."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class DecodeError(IdonethisError):
    """Raised when a response body is not the JSON we expected."""

    pass


class AuthenticationError(IdonethisError):
    """Raised when logging in fails."""

    pass


class InvalidArgument(IdonethisError, ValueError):
    """Raised when a caller omits a required argument."""

    pass


class SubmissionError(IdonethisError):
    """Raised when the service rejects a new entry."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
