"""Risk score and level from Birdeye token security flags.

Additive score, clamped to 0-100:
- mint authority still set: +30 (supply can be inflated)
- freeze authority still set: +25 (holders can be frozen)
- transfer fee enabled: +15
- metadata mutable: +10
- non-transferable token: +10
- top-10 holders > 50%: +20, > 30%: +10
"""

from src.models.analytics import RiskLevel, SecurityAnalysis
from src.parsers.birdeye.models import BirdeyeTokenSecurity

MEDIUM_RISK_THRESHOLD = 30
HIGH_RISK_THRESHOLD = 60


def risk_level_for(score: int) -> RiskLevel:
    if score >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if score >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def analyze_security(security: BirdeyeTokenSecurity | None) -> SecurityAnalysis:
    if security is None:
        return SecurityAnalysis(
            risk_level=RiskLevel.UNKNOWN,
            description="Security data unavailable",
        )

    score = 0
    factors: list[str] = []

    if security.is_mintable:
        score += 30
        factors.append("Mint authority enabled")
    if security.is_freezable:
        score += 25
        factors.append("Freeze authority enabled")
    if security.has_transfer_fee:
        score += 15
        factors.append("Transfer fee enabled")
    if security.mutableMetadata is True:
        score += 10
        factors.append("Metadata is mutable")
    if security.nonTransferable is True:
        score += 10
        factors.append("Token is non-transferable")

    top10 = security.top10_pct
    if top10 is not None:
        if top10 > 50:
            score += 20
            factors.append(f"Top 10 holders own {top10:.1f}%")
        elif top10 > 30:
            score += 10
            factors.append(f"Top 10 holders own {top10:.1f}%")

    score = max(0, min(100, score))
    description = "; ".join(factors) if factors else "No major risks detected"
    return SecurityAnalysis(
        risk_level=risk_level_for(score),
        description=description,
        risk_score=score,
    )


def supply_status(security: BirdeyeTokenSecurity | None) -> str:
    """Circulation status label shown next to the mint."""
    if security is None:
        return "Unknown"
    return "Mintable" if security.is_mintable else "Fixed Supply"
