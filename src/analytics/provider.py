"""Contract between the normalizer and whatever supplies raw token metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from src.parsers.birdeye.models import (
    BirdeyeHolderItem,
    BirdeyeTokenMetadata,
    BirdeyeTokenOverview,
    BirdeyeTokenSecurity,
)


@dataclass(frozen=True)
class ProviderBundle:
    """Raw responses for one token. Only the overview is guaranteed."""

    overview: BirdeyeTokenOverview
    metadata: BirdeyeTokenMetadata | None = None
    security: BirdeyeTokenSecurity | None = None
    holders: tuple[BirdeyeHolderItem, ...] = field(default_factory=tuple)


class MetricsProvider(Protocol):
    async def fetch(self, mint: str) -> ProviderBundle:
        """Raise on total unavailability only; missing fields stay None."""
        ...
