"""Async HTTP client for the Pathao merchant (Aladdin) API."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import threading
from functools import lru_cache
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx

from ...config import PathaoSettings
from ...schemas.pathao import DEFAULT_ITEM_WEIGHT_KG, DeliveryOrderRequest, PriceQuote, PriceRequest
from .errors import (
    PathaoAPIError,
    PathaoAuthenticationError,
    PathaoConnectionError,
    PathaoMalformedResponseError,
    PathaoTokenMissingError,
)
from .models import DEFAULT_TOKEN_LIFETIME_SECONDS, CachedToken, TokenStatus, TransportResult

API_ROOT = "/aladdin/api/v1"
TOKEN_ENDPOINT = f"{API_ROOT}/issue-token"

logger = logging.getLogger(__name__)


def _nested_list(payload: Any) -> list:
    """Pull ``payload["data"]["data"]`` out of a list response, or ``[]``."""
    if not isinstance(payload, dict):
        return []
    inner = payload.get("data")
    if not isinstance(inner, dict):
        return []
    items = inner.get("data")
    return items if isinstance(items, list) else []


class PathaoClient:
    def __init__(
        self,
        settings: PathaoSettings,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings
        self.base_url = settings.base_url
        self.timeout = settings.request_timeout_seconds
        self._transport = transport
        self._clock = clock
        self._token = CachedToken()
        self._auth_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: PathaoSettings | None = None, **kwargs: Any) -> "PathaoClient":
        return cls(settings or PathaoSettings(), **kwargs)

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        )

    async def _send(self, method: str, url: str, headers: dict[str, str], body: Any = None) -> TransportResult:
        """Issue one request and decode the body, keeping the raw text."""
        content = None
        if body is not None:
            content = json.dumps(body).encode("utf-8")
            headers = {**headers, "Content-Length": str(len(content))}

        try:
            async with self._get_client() as client:
                response = await client.request(method, url, headers=headers, content=content)
        except httpx.TransportError as exc:
            logger.error(f"Pathao request {method} {url} failed: {exc}")
            raise PathaoConnectionError(f"Failed to connect to Pathao at {self.base_url}: {exc}") from exc

        raw = response.text
        try:
            return TransportResult(status=response.status_code, raw=raw, data=json.loads(raw), parsed=True)
        except ValueError:
            return TransportResult(status=response.status_code, raw=raw)

    async def authenticate(self) -> str:
        """Return a bearer token, issuing a new one when the cached token is stale.

        Concurrent callers that find the cache cold share a single round trip
        to the issue-token endpoint.
        """
        if self._token.is_fresh(self._clock()):
            return self._token.access_token

        async with self._auth_lock:
            # Another caller may have refreshed the token while we waited.
            if self._token.is_fresh(self._clock()):
                return self._token.access_token
            return await self._issue_token()

    async def _issue_token(self) -> str:
        auth_endpoint = f"{self.base_url}{TOKEN_ENDPOINT}"
        logger.info(f"Authenticating with Pathao at {auth_endpoint}")

        result = await self._send(
            "POST",
            auth_endpoint,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            body={
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
                "username": self.settings.username,
                "password": self.settings.password,
                "grant_type": "password",
            },
        )

        if result.status != 200:
            logger.error(f"Pathao authentication failed with status {result.status}: {result.raw}")
            raise PathaoAuthenticationError(result.status, result.raw)

        data = result.data if isinstance(result.data, dict) else {}
        access_token = data.get("access_token")
        if not access_token:
            logger.error(f"Pathao token response has no access token: {result.raw}")
            raise PathaoTokenMissingError("Pathao API did not return an access token")

        expires_in = data.get("expires_in") or DEFAULT_TOKEN_LIFETIME_SECONDS
        try:
            lifetime = float(expires_in)
        except (TypeError, ValueError) as exc:
            logger.error(f"Pathao token response has an unusable expires_in: {result.raw}")
            raise PathaoMalformedResponseError(result.status, result.raw) from exc
        self._token = CachedToken(access_token=access_token, expires_at=self._clock() + lifetime)
        logger.info(f"Authenticated with Pathao, token valid for {expires_in}s")
        return access_token

    async def request(self, endpoint: str, method: str = "GET", body: Any = None) -> Any:
        """Call an authenticated endpoint and return its decoded JSON body."""
        token = await self.authenticate()
        if not token:
            raise PathaoTokenMissingError("Failed to obtain Pathao access token")

        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"Pathao {method} {url}")
        result = await self._send(method, url, headers=headers, body=body)

        if result.status >= 400:
            logger.error(f"Pathao {method} {endpoint} returned {result.status}: {result.raw}")
            raise PathaoAPIError(result.status, result.raw)
        if not result.parsed:
            raise PathaoMalformedResponseError(result.status, result.raw)
        return result.data

    def token_status(self) -> TokenStatus:
        token = self._token
        if not token.access_token or token.expires_at is None:
            return TokenStatus(has_token=False, is_expired=True)
        remaining = token.expires_at - self._clock()
        return TokenStatus(
            has_token=True,
            is_expired=not token.is_fresh(self._clock()),
            expires_at=token.expires_at,
            seconds_remaining=max(int(remaining), 0),
        )

    def _resolve_store_id(self, store_id: Optional[int]) -> int:
        resolved = store_id if store_id is not None else self.settings.store_id
        if resolved is None:
            raise ValueError("No Pathao store id given and PATHAO_STORE_ID is not configured.")
        return resolved

    async def get_cities(self) -> list[dict]:
        return _nested_list(await self.request(f"{API_ROOT}/city-list"))

    async def get_zones(self, city_id: int) -> list[dict]:
        return _nested_list(await self.request(f"{API_ROOT}/cities/{city_id}/zone-list"))

    async def get_areas(self, zone_id: int) -> list[dict]:
        return _nested_list(await self.request(f"{API_ROOT}/zones/{zone_id}/area-list"))

    async def get_stores(self) -> list[dict]:
        return _nested_list(await self.request(f"{API_ROOT}/stores"))

    async def calculate_price(self, params: PriceRequest) -> PriceQuote:
        """Quote a delivery; fields missing from the response default to 0."""
        store_id = self._resolve_store_id(params.store_id)
        payload = await self.request(
            f"{API_ROOT}/merchant/price-plan",
            method="POST",
            body={
                "store_id": store_id,
                "item_type": params.item_type,
                "delivery_type": params.delivery_type,
                "item_weight": params.item_weight or DEFAULT_ITEM_WEIGHT_KG,
                "recipient_city": params.recipient_city,
                "recipient_zone": params.recipient_zone,
            },
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            data = {}
        return PriceQuote(
            price=data.get("price") or 0,
            cod_charge=data.get("cod_charge") or 0,
            promo_discount=data.get("promo_discount") or 0,
            total_price=data.get("total_fee") or 0,
        )

    async def create_order(self, order: DeliveryOrderRequest) -> Any:
        """Create a consignment; the courier's response is returned unchanged."""
        store_id = self._resolve_store_id(order.store_id)
        logger.info(f"Creating Pathao order for merchant order {order.merchant_order_id}")
        return await self.request(
            f"{API_ROOT}/orders",
            method="POST",
            body={
                "store_id": store_id,
                "merchant_order_id": order.merchant_order_id,
                "recipient_name": order.recipient_name,
                "recipient_phone": order.recipient_phone,
                "recipient_address": order.recipient_address,
                "recipient_city": order.recipient_city,
                "recipient_zone": order.recipient_zone,
                "recipient_area": order.recipient_area,
                "delivery_type": order.delivery_type,
                "item_type": order.item_type,
                "item_quantity": order.item_quantity,
                "item_weight": order.item_weight,
                "item_description": order.item_description,
                "amount_to_collect": order.amount_to_collect,
                "special_instruction": order.special_instruction or "",
            },
        )

    async def track_order(self, consignment_id: str) -> Any:
        # quote() leaves dots alone, so dot segments must be refused outright
        if consignment_id.strip() in ("", ".", ".."):
            raise ValueError(f"Invalid consignment id {consignment_id!r}")
        payload = await self.request(f"{API_ROOT}/orders/{quote(consignment_id, safe='')}")
        return payload.get("data") if isinstance(payload, dict) else None


_client_lock = threading.Lock()


@lru_cache()
def load_pathao_client() -> PathaoClient:
    pathao_settings = PathaoSettings()
    logger.info(
        f"Initializing Pathao client: base_url={pathao_settings.base_url}, "
        f"client_id={'present' if pathao_settings.client_id else 'missing'}, "
        f"credentials={'complete' if pathao_settings.client_id and pathao_settings.client_secret else 'incomplete'}"
    )
    return PathaoClient(pathao_settings)


def get_pathao_client() -> PathaoClient:
    """Get the process-wide Pathao client, configured from PATHAO_* variables.

    FastAPI resolves sync dependencies on worker threads; the lock keeps
    concurrent first requests from building two clients with separate token
    caches.
    """
    with _client_lock:
        return load_pathao_client()
