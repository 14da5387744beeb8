"""Analytics normalizer: fold provider responses into one TokenAnalytics.

Missing upstream fields never fail a refresh: display fields walk their
fallback chains, numeric aggregates become None. Only a provider failure
(network, parse, timeout, unknown token) aborts, as ProviderUnavailableError.
"""

from __future__ import annotations

from decimal import Decimal

from loguru import logger

from config.settings import Settings
from src.analytics.exceptions import DegenerateInputError, ProviderUnavailableError
from src.analytics.fallback import (
    SOL_LOGO_URI,
    WSOL_MINT,
    first_present,
    resolve_logo,
    resolve_name,
    resolve_symbol,
)
from src.analytics.provider import MetricsProvider, ProviderBundle
from src.analytics.risk import analyze_security, supply_status
from src.models.analytics import (
    ExistingTokenRecord,
    RealTradeData,
    TokenAnalytics,
    TokenDetails,
    TopHolder,
)
from src.parsers.birdeye.client import BirdeyeClient
from src.parsers.birdeye.models import BirdeyeHolderItem
from src.parsers.birdeye.provider import BirdeyeMetricsProvider


def _positive_float(value: Decimal | float | None) -> float | None:
    """Provider zeros mean "no data"; turn them into None at the boundary."""
    if value is None:
        return None
    value = float(value)
    return value if value > 0 else None


def _positive_int(value: int | None) -> int | None:
    if value is None or value <= 0:
        return None
    return int(value)


def _top_holders(
    holders: tuple[BirdeyeHolderItem, ...],
    total_supply: float | None,
    limit: int,
) -> tuple[TopHolder, ...]:
    if not holders or not total_supply:
        return ()

    seen: set[str] = set()
    result: list[TopHolder] = []
    for item in holders:
        if item.ui_amount is None or item.owner in seen:
            continue
        seen.add(item.owner)
        pct = float(item.ui_amount) * 100 / total_supply
        result.append(TopHolder(address=item.owner, percentage=max(0.0, min(100.0, pct))))

    result.sort(key=lambda h: h.percentage, reverse=True)
    return tuple(result[:limit])


def build_analytics(
    mint: str,
    bundle: ProviderBundle,
    existing: ExistingTokenRecord | None = None,
    symbol_hint: str | None = None,
    *,
    holders_limit: int = 10,
    native_mint: str = WSOL_MINT,
    native_logo_uri: str = SOL_LOGO_URI,
) -> TokenAnalytics:
    """Pure fold of one provider bundle (plus caller-known info) into TokenAnalytics."""
    overview = bundle.overview
    meta = bundle.metadata
    security = bundle.security

    fetched_name = first_present((
        lambda: meta.name if meta else None,
        lambda: overview.name,
    ))
    fetched_symbol = first_present((
        lambda: meta.symbol if meta else None,
        lambda: overview.symbol,
    ))
    fetched_logo = first_present((
        lambda: meta.logo if meta else None,
        lambda: overview.logoURI,
    ))

    details = TokenDetails(
        mint=mint,
        symbol=resolve_symbol(fetched_symbol, existing, symbol_hint),
        name=resolve_name(fetched_name, existing),
        logo_uri=resolve_logo(
            mint,
            fetched_logo,
            existing,
            native_mint=native_mint,
            native_logo_uri=native_logo_uri,
        ),
        price=float(overview.price) if overview.price is not None else 0.0,
        price_change_24h=(
            float(overview.priceChange24hPercent)
            if overview.priceChange24hPercent is not None
            else 0.0
        ),
        market_cap=_positive_float(overview.marketCap),
        status=supply_status(security),
    )

    trade_data = RealTradeData(
        liquidity=_positive_float(overview.liquidity),
        volume_24h=_positive_float(overview.v24hUSD),
        buys_24h=_positive_int(overview.buy24h),
        sells_24h=_positive_int(overview.sell24h),
    )

    total_supply = first_present((
        lambda: _positive_float(security.totalSupply) if security else None,
        lambda: _positive_float(overview.supply),
        lambda: _positive_float(overview.circulatingSupply),
    ))

    return TokenAnalytics(
        details=details,
        security=analyze_security(security),
        trade_data=trade_data,
        top_holders=_top_holders(bundle.holders, total_supply, holders_limit),
        total_holders=_positive_int(overview.holder),
    )


class AnalyticsNormalizer:
    """Fetch from a MetricsProvider and normalize into TokenAnalytics."""

    def __init__(
        self,
        provider: MetricsProvider,
        *,
        holders_limit: int = 10,
        native_mint: str = WSOL_MINT,
        native_logo_uri: str = SOL_LOGO_URI,
    ) -> None:
        self._provider = provider
        self._holders_limit = holders_limit
        self._native_mint = native_mint
        self._native_logo_uri = native_logo_uri

    @classmethod
    def from_settings(cls, settings: Settings) -> AnalyticsNormalizer:
        """Wire a Birdeye-backed normalizer from application settings."""
        client = BirdeyeClient(
            settings.birdeye_api_key,
            max_rps=settings.birdeye_max_rps,
            timeout=settings.birdeye_timeout_sec,
        )
        provider = BirdeyeMetricsProvider(client, holders_limit=settings.top_holders_limit)
        return cls(
            provider,
            holders_limit=settings.top_holders_limit,
            native_mint=settings.native_mint,
            native_logo_uri=settings.native_logo_uri,
        )

    async def normalize(
        self,
        mint: str,
        existing: ExistingTokenRecord | None = None,
        symbol_hint: str | None = None,
    ) -> TokenAnalytics:
        if not mint or not mint.strip():
            raise DegenerateInputError("Token mint is required")

        try:
            bundle = await self._provider.fetch(mint)
        except Exception as e:
            logger.warning(f"[ANALYTICS] Provider failed for {mint[:12]}: {type(e).__name__}: {e}")
            raise ProviderUnavailableError() from e

        analytics = build_analytics(
            mint,
            bundle,
            existing,
            symbol_hint,
            holders_limit=self._holders_limit,
            native_mint=self._native_mint,
            native_logo_uri=self._native_logo_uri,
        )
        logger.debug(
            f"[ANALYTICS] {analytics.details.display_symbol} price={analytics.details.price} "
            f"change24h={analytics.details.price_change_24h:+.2f}% "
            f"holders={len(analytics.top_holders)} risk={analytics.security.risk_level.value}"
        )
        return analytics

    async def close(self) -> None:
        close = getattr(self._provider, "close", None)
        if close is not None:
            await close()
