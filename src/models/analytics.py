"""Immutable value objects handed from the normalizer to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class RiskLevel(str, Enum):
    LOW = "Low Risk"
    MEDIUM = "Medium Risk"
    HIGH = "High Risk"
    UNKNOWN = "Unknown Risk"  # no security data for this refresh


class TimeFrame(str, Enum):
    """Chart range picked by the viewer. Recorded only, see AnalyticsRefresher."""

    HOUR_1 = "1H"
    DAY_1 = "1D"
    WEEK_1 = "1W"
    MONTH_1 = "1M"
    YTD = "YTD"
    ALL = "ALL"


@dataclass(frozen=True)
class ExistingTokenRecord:
    """Partially known token info the caller already has (e.g. a wallet holding)."""

    mint: str | None = None
    symbol: str | None = None
    name: str | None = None
    logo_uri: str | None = None


@dataclass(frozen=True)
class TokenDetails:
    mint: str
    symbol: str
    name: str
    price: float
    price_change_24h: float
    status: str
    logo_uri: str | None = None
    market_cap: float | None = None

    @property
    def display_symbol(self) -> str:
        return self.symbol.upper()


@dataclass(frozen=True)
class TopHolder:
    address: str
    percentage: float  # 0-100 of total supply


@dataclass(frozen=True)
class SecurityAnalysis:
    risk_level: RiskLevel
    description: str
    risk_score: int | None = None  # 0-100, None when security data is missing


@dataclass(frozen=True)
class RealTradeData:
    """24h trading aggregates. None means the provider had no data."""

    liquidity: float | None = None
    volume_24h: float | None = None
    buys_24h: int | None = None
    sells_24h: int | None = None

    @property
    def total_trades(self) -> int | None:
        if self.buys_24h is None and self.sells_24h is None:
            return None
        return (self.buys_24h or 0) + (self.sells_24h or 0)


@dataclass(frozen=True)
class TokenAnalytics:
    details: TokenDetails
    security: SecurityAnalysis
    trade_data: RealTradeData
    top_holders: tuple[TopHolder, ...] = field(default_factory=tuple)
    total_holders: int | None = None


@dataclass(frozen=True)
class PricePoint:
    """One synthesized sample. Not comparable across generations."""

    timestamp: datetime
    price: float
    label: str
