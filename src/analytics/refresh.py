"""Refresh coordinator for one consumer (e.g. a token details view).

- At most one in-flight refresh per mint: concurrent callers share the task.
- The provider round-trip is bounded by a timeout; expiry is reported as
  ProviderUnavailableError like any other provider failure.
- close() cancels in-flight work. Anything finishing afterwards is dropped
  and never published.
- Snapshots are only ever replaced wholesale, never edited in place.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta, tzinfo

from loguru import logger

from config.settings import Settings
from src.analytics.exceptions import (
    DegenerateInputError,
    ProviderUnavailableError,
    RefresherClosedError,
)
from src.analytics.normalizer import AnalyticsNormalizer
from src.analytics.series import (
    DEFAULT_FLOOR,
    DEFAULT_NOISE,
    DEFAULT_POINTS,
    DEFAULT_SPAN,
    reconstruct_series,
)
from src.models.analytics import ExistingTokenRecord, PricePoint, TimeFrame, TokenAnalytics


@dataclass(frozen=True)
class AnalyticsSnapshot:
    analytics: TokenAnalytics
    series: tuple[PricePoint, ...]
    time_frame: TimeFrame = TimeFrame.DAY_1
    refreshed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def has_chart(self) -> bool:
        return bool(self.series)


class AnalyticsRefresher:
    def __init__(
        self,
        normalizer: AnalyticsNormalizer,
        *,
        timeout: float = 5.0,
        rng: random.Random | None = None,
        series_points: int = DEFAULT_POINTS,
        series_span: timedelta = DEFAULT_SPAN,
        series_noise: float = DEFAULT_NOISE,
        series_floor: float = DEFAULT_FLOOR,
        tz: tzinfo | None = None,
    ) -> None:
        self._normalizer = normalizer
        self._timeout = timeout
        self._rng = rng or random.Random()
        self._series_points = series_points
        self._series_span = series_span
        self._series_noise = series_noise
        self._series_floor = series_floor
        self._tz = tz

        self._inflight: dict[str, asyncio.Task[AnalyticsSnapshot]] = {}
        self._latest: dict[str, AnalyticsSnapshot] = {}
        self._errors: dict[str, str] = {}
        self._time_frames: dict[str, TimeFrame] = {}
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        normalizer: AnalyticsNormalizer | None = None,
        rng: random.Random | None = None,
    ) -> AnalyticsRefresher:
        return cls(
            normalizer or AnalyticsNormalizer.from_settings(settings),
            timeout=settings.analytics_timeout_sec,
            rng=rng,
            series_points=settings.series_points,
            series_span=timedelta(hours=settings.series_span_hours),
            series_noise=settings.series_noise_pct,
            series_floor=settings.series_price_floor,
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def latest(self, mint: str) -> AnalyticsSnapshot | None:
        return self._latest.get(mint)

    def last_error(self, mint: str) -> str | None:
        """Message of the most recent failed refresh, cleared on success."""
        return self._errors.get(mint)

    def is_refreshing(self, mint: str) -> bool:
        return mint in self._inflight

    async def refresh(
        self,
        mint: str,
        existing: ExistingTokenRecord | None = None,
        symbol_hint: str | None = None,
    ) -> AnalyticsSnapshot:
        """Fetch, normalize and rebuild the series for a mint.

        A call made while a refresh for the same mint is pending joins it.
        """
        if self._closed:
            raise RefresherClosedError("Refresher is closed")

        task = self._inflight.get(mint)
        if task is None:
            task = asyncio.create_task(
                self._run(mint, existing, symbol_hint), name=f"analytics_refresh:{mint[:12]}"
            )
            self._inflight[mint] = task
            task.add_done_callback(lambda t, m=mint: self._forget(m, t))
        else:
            logger.debug(f"[REFRESH] Joining in-flight refresh for {mint[:12]}")

        # Shielded so one caller going away does not cancel the shared task
        return await asyncio.shield(task)

    def select_time_frame(self, mint: str, time_frame: TimeFrame) -> AnalyticsSnapshot | None:
        """Record the chart range; the synthetic series itself is unchanged."""
        self._time_frames[mint] = time_frame
        snapshot = self._latest.get(mint)
        if snapshot is None:
            return None
        snapshot = replace(snapshot, time_frame=time_frame)
        self._latest[mint] = snapshot
        return snapshot

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        pending = list(self._inflight.values())
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.debug(f"[REFRESH] Cancelled {len(pending)} in-flight refreshes on close")
        await self._normalizer.close()

    def _forget(self, mint: str, task: asyncio.Task) -> None:
        if self._inflight.get(mint) is task:
            del self._inflight[mint]

    async def _run(
        self,
        mint: str,
        existing: ExistingTokenRecord | None,
        symbol_hint: str | None,
    ) -> AnalyticsSnapshot:
        try:
            analytics = await asyncio.wait_for(
                self._normalizer.normalize(mint, existing, symbol_hint),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"[REFRESH] Timed out after {self._timeout}s for {mint[:12]}")
            self._record_error(mint, "Failed to load token data")
            raise ProviderUnavailableError() from e
        except ProviderUnavailableError as e:
            self._record_error(mint, str(e))
            raise

        if self._closed:
            raise RefresherClosedError("Refresher closed during refresh")

        series = self._build_series(analytics)
        snapshot = AnalyticsSnapshot(
            analytics=analytics,
            series=series,
            time_frame=self._time_frames.get(mint, TimeFrame.DAY_1),
        )
        self._latest[mint] = snapshot
        self._errors.pop(mint, None)
        return snapshot

    def _build_series(self, analytics: TokenAnalytics) -> tuple[PricePoint, ...]:
        details = analytics.details
        try:
            return reconstruct_series(
                details.price,
                details.price_change_24h,
                points=self._series_points,
                span=self._series_span,
                noise=self._series_noise,
                floor=self._series_floor,
                rng=self._rng,
                tz=self._tz,
            )
        except DegenerateInputError as e:
            # Analytics are still valid; only the chart is unavailable
            logger.info(f"[REFRESH] No chart for {details.mint[:12]}: {e}")
            return ()

    def _record_error(self, mint: str, message: str) -> None:
        if not self._closed:
            self._errors[mint] = message
