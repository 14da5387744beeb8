from src.models.analytics import (
    ExistingTokenRecord,
    PricePoint,
    RealTradeData,
    RiskLevel,
    SecurityAnalysis,
    TimeFrame,
    TokenAnalytics,
    TokenDetails,
    TopHolder,
)

__all__ = [
    "ExistingTokenRecord",
    "PricePoint",
    "RealTradeData",
    "RiskLevel",
    "SecurityAnalysis",
    "TimeFrame",
    "TokenAnalytics",
    "TokenDetails",
    "TopHolder",
]
