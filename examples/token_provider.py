"""
token_provider.py - Cache an OAuth access token and refresh it ahead of expiry.

Demonstrates a provider backed by ``fetch_r``: concurrent callers share one
token request, and once the token enters its prefetch window only the first
caller waits for the new one.

Usage:
    export TOKEN_URL=https://auth.example.com/oauth/token
    export CLIENT_ID=... CLIENT_SECRET=...
    export INFLIGHT_PREFETCH_PERIOD=5m INFLIGHT_TIME_REMAINING=30s
    python examples/token_provider.py
"""

import asyncio
import os
import time

from inflight import (
    ExpiringValue,
    ProviderSettings,
    SingleInFlightCachingValueProvider,
    fetch_r,
)


async def main() -> None:
    settings = ProviderSettings.from_env()
    retry_config = settings.to_retry_config()

    async def fetch_token() -> ExpiringValue[str]:
        response = await fetch_r(
            os.environ["TOKEN_URL"],
            method="POST",
            retry_config=retry_config,
            data={
                "grant_type": "client_credentials",
                "client_id": os.environ["CLIENT_ID"],
                "client_secret": os.environ["CLIENT_SECRET"],
            },
        )
        response.raise_for_status()
        body = response.json()
        return ExpiringValue(body["access_token"], time.time() + body["expires_in"])

    tokens = SingleInFlightCachingValueProvider.from_settings(fetch_token, settings)

    first, second = await asyncio.gather(tokens.get(), tokens.get())
    print("shared token:", first == second)


if __name__ == "__main__":
    asyncio.run(main())
