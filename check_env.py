#!/usr/bin/env python3
"""Helper script to check and create the .env file for Pathao configuration."""

from pathlib import Path
import os

ENV_TEMPLATE = """# Pathao merchant API (Required for courier delivery)
# Get these from: https://merchant.pathao.com → Developers API
PATHAO_CLIENT_ID=your-client-id
PATHAO_CLIENT_SECRET=your-client-secret
PATHAO_USERNAME=merchant@example.com
PATHAO_PASSWORD=your-merchant-password
PATHAO_BASE_URL=https://api-hermes.pathao.com
# Default pickup store (see GET /api/pathao/stores)
PATHAO_STORE_ID=
# PATHAO_REQUEST_TIMEOUT_SECONDS=30

# API Configuration
BAKERY_API_PREFIX=/api
BAKERY_LOG_LEVEL=info
# BAKERY_FRONTEND_ALLOWED_ORIGINS - Leave commented to use defaults
# JSON array: ["http://localhost:5173"] or comma-separated: http://localhost:5173,http://127.0.0.1:5173
"""

SECRET_KEYS = ("PATHAO_CLIENT_SECRET", "PATHAO_PASSWORD")


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "..." + value[-2:]
    return "***"


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Pathao Environment Variables Checker")
    print("=" * 60)
    print()

    if env_file.exists():
        print(f"✅ Found .env file at: {env_file}")
        print()
        print("Current contents:")
        print("-" * 60)
        for line in env_file.read_text(encoding="utf-8").split("\n"):
            key, sep, value = line.partition("=")
            if sep and key.strip() in SECRET_KEYS and value.strip():
                print(f"{key}={_mask(value.strip())}")
            else:
                print(line)
        print("-" * 60)
        print()
    else:
        print(f"❌ .env file NOT found at: {env_file}")
        print()
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print()
        print("⚠️  Please edit .env and add your Pathao merchant credentials!")
        print()
        return

    print("Checking environment variables...")
    print()
    for key in ("PATHAO_CLIENT_ID", "PATHAO_CLIENT_SECRET", "PATHAO_STORE_ID"):
        if os.getenv(key):
            print(f"✅ {key} set in environment")
        else:
            print(f"ℹ️  {key} not in environment (may come from .env)")
    print()

    print("Testing config loading...")
    print()
    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from bakery_courier.config import PathaoSettings

        pathao_settings = PathaoSettings()
        print(f"{'✅' if pathao_settings.client_id else '❌'} Client ID: {'present' if pathao_settings.client_id else 'missing'}")
        print(f"{'✅' if pathao_settings.client_secret else '❌'} Client secret: {'present' if pathao_settings.client_secret else 'missing'}")
        print(f"✅ Base URL: {pathao_settings.base_url}")
        if pathao_settings.store_id is not None:
            print(f"✅ Default store ID: {pathao_settings.store_id}")
        else:
            print("⚠️  No default store ID; price and order requests must name one")
        print()

        if pathao_settings.client_id and pathao_settings.client_secret:
            print("=" * 60)
            print("✅ SUCCESS: Pathao is configured! Run check_pathao.py for a live test.")
            print("=" * 60)
        else:
            print("=" * 60)
            print("❌ ERROR: Pathao is NOT configured")
            print("=" * 60)
            print()
            print("Troubleshooting:")
            print("1. Make sure .env file exists in project root")
            print("2. Make sure variables start with the PATHAO_ prefix")
            print("3. Restart backend after editing .env")
            print()
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print()
        print("Make sure you're running this from the project root directory")


if __name__ == "__main__":
    main()
