"""Exceptions raised by the Pathao client."""

from __future__ import annotations


class PathaoError(Exception):
    """Base class for every failure talking to the Pathao API."""


class PathaoAuthenticationError(PathaoError):
    """The issue-token endpoint answered with something other than 200."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Pathao authentication failed: {status_code} - {body}")


class PathaoTokenMissingError(PathaoError):
    """Authentication produced no usable access token."""


class PathaoAPIError(PathaoError):
    """An authenticated endpoint answered with status >= 400."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Pathao API error: {status_code} - {body}")


class PathaoMalformedResponseError(PathaoError):
    """A successful response whose body is not JSON."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Pathao API returned a non-JSON response: {status_code} - {body}")


class PathaoConnectionError(PathaoError, ConnectionError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""
