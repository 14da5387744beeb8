"""Shared test fixtures."""

import random
from decimal import Decimal

import pytest

from src.analytics.provider import ProviderBundle
from src.parsers.birdeye.models import (
    BirdeyeHolderItem,
    BirdeyeTokenMetadata,
    BirdeyeTokenOverview,
    BirdeyeTokenSecurity,
)

TEST_MINT = "TESTmint1111111111111111111111111111111111"


class FakeProvider:
    """In-memory MetricsProvider returning a fixed bundle (or raising)."""

    def __init__(self, bundle: ProviderBundle | None = None, error: Exception | None = None) -> None:
        self.bundle = bundle
        self.error = error
        self.calls: list[str] = []
        self.closed = False

    async def fetch(self, mint: str) -> ProviderBundle:
        self.calls.append(mint)
        if self.error is not None:
            raise self.error
        assert self.bundle is not None
        return self.bundle

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def overview() -> BirdeyeTokenOverview:
    return BirdeyeTokenOverview(
        address=TEST_MINT,
        name="Test Token",
        symbol="test",
        price=Decimal("1.25"),
        priceChange24hPercent=Decimal("25"),
        marketCap=Decimal("1250000"),
        liquidity=Decimal("300000"),
        supply=Decimal("1000000"),
        holder=4200,
        v24hUSD=Decimal("85000"),
        buy24h=600,
        sell24h=400,
    )


@pytest.fixture
def security() -> BirdeyeTokenSecurity:
    return BirdeyeTokenSecurity(
        mintAuthority=None,
        freezeAuthority=None,
        totalSupply=Decimal("1000000"),
        top10HolderPercent=Decimal("0.2"),
    )


@pytest.fixture
def holders() -> tuple[BirdeyeHolderItem, ...]:
    return (
        BirdeyeHolderItem(owner="HolderB222222222222222222222222222222222", ui_amount=Decimal("50000")),
        BirdeyeHolderItem(owner="HolderA111111111111111111111111111111111", ui_amount=Decimal("120000")),
        BirdeyeHolderItem(owner="HolderC333333333333333333333333333333333", ui_amount=Decimal("10000")),
    )


@pytest.fixture
def bundle(overview, security, holders) -> ProviderBundle:
    return ProviderBundle(
        overview=overview,
        metadata=BirdeyeTokenMetadata(
            address=TEST_MINT,
            name="Test Token",
            symbol="test",
            logo_uri="https://example.com/test.png",
        ),
        security=security,
        holders=holders,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def make_provider():
    return FakeProvider
