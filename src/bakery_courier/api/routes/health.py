"""Health endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, status

from ...services.pathao import PathaoClient, PathaoError, get_pathao_client

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/pathao", status_code=status.HTTP_200_OK)
async def health_pathao(
    probe: bool = Query(default=False, description="Authenticate against Pathao instead of only reading the token cache."),
    client: PathaoClient = Depends(get_pathao_client),
) -> dict:
    """Report the cached Pathao token; with ``probe`` also try to authenticate."""
    result: dict = {"service": "pathao", "base_url": client.base_url}
    if probe:
        try:
            await client.authenticate()
            result["healthy"] = True
        except PathaoError as e:
            result["healthy"] = False
            result["error"] = str(e)
    result["token"] = asdict(client.token_status())
    return result
