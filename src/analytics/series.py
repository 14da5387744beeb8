"""Synthetic intraday price series from current price and 24h change.

No historical feed exists, so the chart is a straight line from the implied
24h-ago price to the current price with small multiplicative noise:

    start = current / (1 + change_pct / 100)
    trend_i = start + (current - start) * i / (N - 1)
    price_i = max(trend_i * (1 + u_i), floor),   u_i ~ U(-noise, +noise)

The last point keeps its noise: only its trend component equals current.
"""

from __future__ import annotations

import math
import random
from datetime import datetime, timedelta, tzinfo

from loguru import logger

from src.analytics.exceptions import DegenerateInputError
from src.models.analytics import PricePoint

DEFAULT_POINTS = 24
DEFAULT_SPAN = timedelta(hours=24)
DEFAULT_NOISE = 0.01
DEFAULT_FLOOR = 0.0001
LABEL_FORMAT = "%I:%M %p"  # "03:15 PM"


def compute_start_price(current: float, change_pct: float) -> float:
    """Price 24h ago implied by current price and 24h percent change.

    Raises DegenerateInputError for a non-positive current price, -100%
    change, or any result that is not a finite positive number.
    """
    if not math.isfinite(current) or current <= 0:
        raise DegenerateInputError(f"Current price must be positive, got {current}")
    if not math.isfinite(change_pct):
        raise DegenerateInputError(f"24h change must be finite, got {change_pct}")

    denominator = 1 + change_pct / 100
    if denominator == 0:
        raise DegenerateInputError("24h change of -100% has no defined start price")

    start = current / denominator
    if not math.isfinite(start) or start <= 0:
        raise DegenerateInputError(
            f"Start price {start} from change {change_pct}% is not a valid price"
        )
    return start


def trend_price(start: float, current: float, index: int, points: int) -> float:
    """Noise-free linear interpolation at sample index."""
    fraction = index / (points - 1) if points > 1 else 1.0
    return start + (current - start) * fraction


def reconstruct_series(
    current: float,
    change_pct: float,
    *,
    points: int = DEFAULT_POINTS,
    span: timedelta = DEFAULT_SPAN,
    noise: float = DEFAULT_NOISE,
    floor: float = DEFAULT_FLOOR,
    rng: random.Random | None = None,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> tuple[PricePoint, ...]:
    """Build `points` samples spaced evenly over `span`, oldest first.

    Point i sits (points - i) steps before `now`. Pass a seeded `rng` for
    reproducible noise, or noise=0 to get the bare trend.
    Labels are rendered in `tz` (the local zone when None).
    """
    if points <= 0:
        raise DegenerateInputError(f"Point count must be positive, got {points}")
    if span <= timedelta(0):
        raise DegenerateInputError(f"Series span must be positive, got {span}")
    if noise < 0 or noise >= 1:
        raise DegenerateInputError(f"Noise must be in [0, 1), got {noise}")
    if floor <= 0:
        raise DegenerateInputError(f"Price floor must be positive, got {floor}")

    start = compute_start_price(current, change_pct)
    rng = rng or random.Random()
    now = now or datetime.now().astimezone()
    if now.tzinfo is None:
        now = now.astimezone()
    step = span / points

    series: list[PricePoint] = []
    for i in range(points):
        trend = trend_price(start, current, i, points)
        jitter = rng.uniform(-noise, noise) if noise else 0.0
        price = max(trend * (1 + jitter), floor)
        ts = now - step * (points - i)
        series.append(
            PricePoint(
                timestamp=ts,
                price=price,
                label=ts.astimezone(tz).strftime(LABEL_FORMAT),
            )
        )

    logger.debug(
        f"[SERIES] {points} points start={start:.8g} current={current:.8g} "
        f"change={change_pct:+.2f}%"
    )
    return tuple(series)
