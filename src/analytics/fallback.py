"""Ordered fallback chains for display fields.

Each field is resolved by walking a tuple of sources in priority order; the
first source returning a present value wins. Blank strings count as absent.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from src.models.analytics import ExistingTokenRecord

T = TypeVar("T")

FieldSource = Callable[[], T | None]

DEFAULT_NAME = "Asset"
DEFAULT_SYMBOL = "ASSET"

WSOL_MINT = "So11111111111111111111111111111111111111112"
SOL_LOGO_URI = (
    "https://raw.githubusercontent.com/solana-labs/token-list/main/assets/"
    "mainnet/So11111111111111111111111111111111111111112/logo.png"
)


def _present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def first_present(sources: Iterable[FieldSource[T]]) -> T | None:
    """Return the value of the first source that yields a present value."""
    for source in sources:
        value = source()
        if _present(value):
            return value
    return None


def resolve_name(
    fetched: str | None,
    existing: ExistingTokenRecord | None,
) -> str:
    """Fetched name > existing record name > "Asset"."""
    chain: tuple[FieldSource[str], ...] = (
        lambda: fetched,
        lambda: existing.name if existing else None,
        lambda: DEFAULT_NAME,
    )
    return first_present(chain)


def resolve_symbol(
    fetched: str | None,
    existing: ExistingTokenRecord | None,
    symbol_hint: str | None = None,
) -> str:
    """Fetched symbol > existing record symbol > caller hint > "ASSET".

    The winner is returned as-is; upper-casing happens at display time.
    """
    chain: tuple[FieldSource[str], ...] = (
        lambda: fetched,
        lambda: existing.symbol if existing else None,
        lambda: symbol_hint,
        lambda: DEFAULT_SYMBOL,
    )
    return first_present(chain)


def resolve_logo(
    mint: str,
    fetched: str | None,
    existing: ExistingTokenRecord | None,
    *,
    native_mint: str = WSOL_MINT,
    native_logo_uri: str = SOL_LOGO_URI,
) -> str | None:
    """Native-asset override > fetched logo > existing record logo > None."""

    def _native_override() -> str | None:
        if mint == native_mint or (existing and existing.mint == native_mint):
            return native_logo_uri
        return None

    chain: tuple[FieldSource[str], ...] = (
        _native_override,
        lambda: fetched,
        lambda: existing.logo_uri if existing else None,
    )
    return first_present(chain)
