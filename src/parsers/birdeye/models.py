"""Pydantic models for Birdeye Data Services API responses."""

from decimal import Decimal

from pydantic import BaseModel


class BirdeyeTokenOverview(BaseModel):
    """Response from /defi/token_overview.

    Mandatory source for an analytics refresh: price, 24h change, mcap,
    liquidity, 24h volume, 24h buy/sell counts, holder count.
    Birdeye reports 0 for fields it has no data for.
    """

    address: str = ""
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    logoURI: str | None = None

    price: Decimal | None = None
    marketCap: Decimal | None = None
    liquidity: Decimal | None = None
    supply: Decimal | None = None
    circulatingSupply: Decimal | None = None
    holder: int | None = None

    v24hUSD: Decimal | None = None
    buy24h: int | None = None
    sell24h: int | None = None

    priceChange24hPercent: Decimal | None = None

    model_config = {"extra": "ignore"}

    @property
    def is_empty(self) -> bool:
        """Birdeye answers unknown mints with an all-null payload."""
        return self.price is None and not self.symbol and not self.name


class BirdeyeTokenMetadata(BaseModel):
    """Response from /defi/v3/token/meta-data/single. 5 CU."""

    address: str = ""
    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    logo_uri: str | None = None
    logoURI: str | None = None

    model_config = {"extra": "ignore"}

    @property
    def logo(self) -> str | None:
        # v3 endpoints use snake_case, legacy ones camelCase
        return self.logo_uri or self.logoURI


class BirdeyeTokenSecurity(BaseModel):
    """Response from /defi/token_security. 50 CU."""

    ownerAddress: str | None = None
    creatorAddress: str | None = None
    top10HolderPercent: Decimal | None = None
    totalSupply: Decimal | None = None
    freezeAuthority: str | None = None
    mintAuthority: str | None = None
    transferFeeEnable: bool | None = None
    nonTransferable: bool | None = None
    mutableMetadata: bool | None = None
    jupStrictList: bool | None = None

    model_config = {"extra": "ignore"}

    @property
    def is_mintable(self) -> bool:
        return self.mintAuthority is not None

    @property
    def is_freezable(self) -> bool:
        return self.freezeAuthority is not None

    @property
    def has_transfer_fee(self) -> bool:
        return self.transferFeeEnable is True

    @property
    def top10_pct(self) -> float | None:
        """Top-10 concentration as 0-100.

        Birdeye returns a 0-1 fraction here; older payloads were already
        percentages, so values above 1 are passed through.
        """
        if self.top10HolderPercent is None:
            return None
        value = float(self.top10HolderPercent)
        return value * 100 if value <= 1 else value


class BirdeyeHolderItem(BaseModel):
    """Single entry from /defi/v3/token/holder."""

    owner: str
    token_account: str | None = None
    ui_amount: Decimal | None = None

    model_config = {"extra": "ignore"}
