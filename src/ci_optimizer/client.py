from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx

from .constants import CALLER_NAME, CALLER_VERSION, OPTIMIZER_PATH


class OptimizerClient:
    """
    Async client for the CI optimizer endpoint.

    HTTP error statuses are returned to the caller untouched; transport
    failures (timeouts, DNS, refused connections) propagate as httpx errors.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "OptimizerClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout_seconds),
            headers={
                "Accept": "application/json",
                "User-Agent": f"{CALLER_NAME}/{CALLER_VERSION}",
            },
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        return False

    async def post_decision(self, payload: Dict[str, Any]) -> httpx.Response:
        """
        POST the request payload to the optimizer and return the raw response.

        httpx timeouts apply per phase (connect, read, ...); the outer
        wait_for bounds the whole exchange by the same number of seconds.
        """
        if self._client is None:
            raise RuntimeError("OptimizerClient must be used as an async context manager")
        return await asyncio.wait_for(
            self._client.post(OPTIMIZER_PATH, json=payload),
            timeout=self.timeout_seconds,
        )
