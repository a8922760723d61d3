"""Pathao client state and transport models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

# Tokens are refreshed once they are this close to expiry.
TOKEN_REFRESH_MARGIN_SECONDS = 300
DEFAULT_TOKEN_LIFETIME_SECONDS = 86400


@dataclass(slots=True)
class CachedToken:
    access_token: Optional[str] = None
    expires_at: Optional[float] = None

    def is_fresh(self, now: float) -> bool:
        """True when the token can be used without re-authenticating."""
        if not self.access_token or self.expires_at is None:
            return False
        return now < self.expires_at - TOKEN_REFRESH_MARGIN_SECONDS


@dataclass(slots=True)
class TransportResult:
    """Outcome of one HTTP exchange.

    ``parsed`` tells a JSON ``null`` body (parsed, data None) apart from a body
    that could not be decoded at all (not parsed, raw text kept).
    """

    status: int
    raw: str
    data: Any = None
    parsed: bool = False


@dataclass(slots=True)
class TokenStatus:
    has_token: bool
    is_expired: bool
    expires_at: Optional[float] = None
    seconds_remaining: Optional[int] = None
