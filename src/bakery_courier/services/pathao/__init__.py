"""Pathao courier integration."""

from .client import PathaoClient, get_pathao_client
from .errors import (
    PathaoAPIError,
    PathaoAuthenticationError,
    PathaoConnectionError,
    PathaoError,
    PathaoMalformedResponseError,
    PathaoTokenMissingError,
)

__all__ = [
    "PathaoClient",
    "get_pathao_client",
    "PathaoError",
    "PathaoAPIError",
    "PathaoAuthenticationError",
    "PathaoConnectionError",
    "PathaoMalformedResponseError",
    "PathaoTokenMissingError",
]
