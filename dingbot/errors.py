"""
Error types raised by the DingTalk webhook client.

Validation errors are raised before any request is made. Everything that can
go wrong while delivering a payload derives from SendError so callers can
catch the whole send path with a single except clause.
"""

from typing import Optional


class DingTalkError(Exception):
    """Base class for all DingTalk client errors."""


class ValidationError(DingTalkError):
    """A message could not be built from the given arguments."""


class SendError(DingTalkError):
    """Base class for failures while posting a payload."""


class TransportError(SendError):
    """The HTTP request itself failed (connection, DNS, timeout)."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"api request error: {cause}")


class HTTPStatusError(SendError):
    """The webhook answered with a status code other than 200."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"api response error: {status_code}")


class DecodeError(SendError):
    """A 200 response body did not have the expected shape."""

    def __init__(self, detail: str, body: Optional[str] = None):
        self.body = body
        super().__init__(f"response struct error: response is not a json anymore, {detail}")


class ApplicationError(SendError):
    """The webhook accepted the request but reported a non-zero errcode."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"api custom error: {{code: {code}, msg: {message}}}")
