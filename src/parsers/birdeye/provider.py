"""Birdeye-backed metrics provider.

The overview call is mandatory: if it fails or comes back empty the token is
treated as unavailable. Metadata, security and holders are enrichments fetched
concurrently; their failures are logged and surface as missing fields.
"""

import asyncio

from loguru import logger

from src.analytics.provider import ProviderBundle
from src.parsers.birdeye.client import BirdeyeApiError, BirdeyeClient


class BirdeyeMetricsProvider:
    def __init__(self, client: BirdeyeClient, holders_limit: int = 10) -> None:
        self._client = client
        self._holders_limit = holders_limit

    async def fetch(self, mint: str) -> ProviderBundle:
        overview_res, metadata_res, security_res, holders_res = await asyncio.gather(
            self._client.get_token_overview(mint),
            self._client.get_token_metadata(mint),
            self._client.get_token_security(mint),
            self._client.get_token_holders(mint, limit=self._holders_limit),
            return_exceptions=True,
        )

        if isinstance(overview_res, BaseException):
            if isinstance(overview_res, asyncio.CancelledError):
                raise overview_res
            raise BirdeyeApiError(f"Overview failed for {mint[:12]}: {overview_res}") from overview_res
        if overview_res.is_empty:
            raise BirdeyeApiError(f"Token not found: {mint}")

        metadata = self._optional(metadata_res, "metadata", mint)
        security = self._optional(security_res, "security", mint)
        holders = self._optional(holders_res, "holders", mint)

        return ProviderBundle(
            overview=overview_res,
            metadata=metadata,
            security=security,
            holders=tuple(holders or ()),
        )

    @staticmethod
    def _optional(result: object, what: str, mint: str):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, Exception):
            logger.debug(f"[BIRDEYE] {what} unavailable for {mint[:12]}: {result}")
            return None
        return result

    async def close(self) -> None:
        await self._client.close()
