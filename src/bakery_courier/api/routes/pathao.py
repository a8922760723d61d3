"""Pathao courier endpoints used by the storefront checkout."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from ...schemas.pathao import DeliveryOrderRequest, PriceQuote, PriceRequest
from ...services.pathao import PathaoClient, PathaoError, get_pathao_client

router = APIRouter(prefix="/pathao", tags=["pathao"])

logger = logging.getLogger(__name__)


def _courier_failure(action: str, exc: PathaoError) -> HTTPException:
    logger.exception(f"Error {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {exc}",
    )


@router.get("/cities", status_code=status.HTTP_200_OK)
async def list_cities(client: PathaoClient = Depends(get_pathao_client)) -> list[dict]:
    try:
        return await client.get_cities()
    except PathaoError as exc:
        raise _courier_failure("fetch Pathao cities", exc) from exc


@router.get("/zones/{city_id}", status_code=status.HTTP_200_OK)
async def list_zones(city_id: int, client: PathaoClient = Depends(get_pathao_client)) -> list[dict]:
    try:
        return await client.get_zones(city_id)
    except PathaoError as exc:
        raise _courier_failure("fetch Pathao zones", exc) from exc


@router.get("/areas/{zone_id}", status_code=status.HTTP_200_OK)
async def list_areas(zone_id: int, client: PathaoClient = Depends(get_pathao_client)) -> list[dict]:
    try:
        return await client.get_areas(zone_id)
    except PathaoError as exc:
        raise _courier_failure("fetch Pathao areas", exc) from exc


@router.get("/stores", status_code=status.HTTP_200_OK)
async def list_stores(client: PathaoClient = Depends(get_pathao_client)) -> list[dict]:
    try:
        return await client.get_stores()
    except PathaoError as exc:
        raise _courier_failure("fetch Pathao stores", exc) from exc


@router.post("/calculate-price", response_model=PriceQuote, status_code=status.HTTP_200_OK)
async def calculate_price(
    payload: PriceRequest, client: PathaoClient = Depends(get_pathao_client)
) -> PriceQuote:
    try:
        return await client.calculate_price(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PathaoError as exc:
        raise _courier_failure("calculate delivery price", exc) from exc


@router.post("/create-order", status_code=status.HTTP_200_OK)
async def create_order(
    payload: DeliveryOrderRequest, client: PathaoClient = Depends(get_pathao_client)
) -> Any:
    """Book a Pathao consignment for a storefront order."""
    try:
        return await client.create_order(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PathaoError as exc:
        raise _courier_failure("create Pathao order", exc) from exc


@router.get("/track/{consignment_id}", status_code=status.HTTP_200_OK)
async def track_order(consignment_id: str, client: PathaoClient = Depends(get_pathao_client)) -> Any:
    try:
        return await client.track_order(consignment_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except PathaoError as exc:
        raise _courier_failure("track Pathao order", exc) from exc
