"""
Exception hierarchy for the mbasic gateway.

Transport and authentication problems are raised; malformed markup found
while scraping is not (the extractors skip the offending element instead).
"""


class AvalonError(Exception):
    """Base class for every error raised by this package."""


class NetworkError(AvalonError):
    """The request never produced a complete HTTP response."""


class OperationCancelled(NetworkError):
    """The operation was aborted through its cancellation token."""


class UnexpectedResponseError(AvalonError):
    """The server answered with a non-2xx status where 2xx was required."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Unexpected response code {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class InvalidCredentialsError(AvalonError):
    """The login round trip completed without yielding a session cookie."""


class SessionNotAuthenticatedError(AvalonError):
    """A scraping operation was attempted before a successful login."""
