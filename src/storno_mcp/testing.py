"""Utility helpers shared by command line entry points."""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .client import SessionStore, StornoClient
from .config import Config

HEALTH_PATH = "/api/v1/system/health"
PROFILE_PATH = "/api/v1/me"


async def _run_test(url: Optional[str], token: Optional[str]) -> int:
    """Execute the Storno connectivity test returning an exit code.

    0: API reachable (and token accepted, when one is configured)
    1: configuration error or API unreachable
    2: API reachable but the token was rejected
    """
    overrides: Dict[str, Any] = {}
    if url:
        overrides["base_url"] = url
    if token:
        overrides["token"] = token

    try:
        config = Config(**overrides)
    except ValidationError as exc:
        print(f"❌ Configuration error: {exc}", file=sys.stderr)
        return 1

    async with StornoClient(SessionStore(config)) as client:
        print(f"🧪 Testing Storno API at {config.base_url}...")
        health = await client.request(HEALTH_PATH)
        if not health.ok:
            print(f"❌ Health check failed: {health.error}", file=sys.stderr)
            return 1
        print("✅ API reachable")

        if not config.token:
            print("⚠️ No token configured; skipping authentication check")
            return 0

        profile = await client.request(PROFILE_PATH)
        if not profile.ok:
            print(f"⚠️ Token rejected ({profile.status}): {profile.error}")
            return 2

        email = profile.data.get("email", "unknown") if isinstance(profile.data, dict) else "unknown"
        print(f"✅ Authenticated as {email}")
        return 0


def test_connection(url: Optional[str] = None, token: Optional[str] = None) -> int:
    """Synchronously test the Storno API connection.

    Parameters mirror the CLI flags and environment variables.
    Returns an exit code compatible with `sys.exit`.
    """

    return asyncio.run(_run_test(url=url, token=token))
