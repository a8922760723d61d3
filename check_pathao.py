#!/usr/bin/env python3
"""Live check of the configured Pathao merchant account: authenticate, then list cities."""

import asyncio
import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from bakery_courier.config import PathaoSettings
from bakery_courier.services.pathao import PathaoClient, PathaoError


async def run() -> int:
    print("=" * 60)
    print("Pathao Connection Test")
    print("=" * 60)
    print()

    print("1. Checking Pathao configuration...")
    pathao_settings = PathaoSettings()
    if not pathao_settings.client_id or not pathao_settings.client_secret:
        print("   [ERROR] PATHAO_CLIENT_ID / PATHAO_CLIENT_SECRET are not configured")
        print("   Please set them in your .env file")
        return 1
    print(f"   [OK] Base URL: {pathao_settings.base_url}")
    print(f"   [OK] Username: {pathao_settings.username}")
    print(f"   [OK] Store ID: {pathao_settings.store_id if pathao_settings.store_id is not None else 'not set'}")
    print()

    client = PathaoClient.from_settings(pathao_settings)

    print("2. Requesting access token...")
    try:
        token = await client.authenticate()
    except PathaoError as e:
        print(f"   [ERROR] {e}")
        return 1
    status = client.token_status()
    print(f"   [OK] Got access token: {token[:20]}...")
    print(f"   [OK] Token valid for {status.seconds_remaining}s")
    print()

    print("3. Fetching cities...")
    try:
        cities = await client.get_cities()
    except PathaoError as e:
        print(f"   [ERROR] {e}")
        return 1
    print(f"   [OK] Got {len(cities)} cities")
    for city in cities[:5]:
        print(f"   - {city.get('city_name')} (ID: {city.get('city_id')})")
    print()

    print("=" * 60)
    print("[SUCCESS] Pathao is connected and working!")
    print("=" * 60)
    return 0


def main() -> int:
    return asyncio.run(run())


if __name__ == "__main__":
    sys.exit(main())
