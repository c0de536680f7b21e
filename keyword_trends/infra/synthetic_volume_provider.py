import logging
from datetime import date
from typing import List, Optional

import numpy as np

from keyword_trends.domain.monthly_observation import MonthlyObservation
from keyword_trends.domain.volume_provider import MonthlyVolumeProvider

logger = logging.getLogger(__name__)


class SyntheticVolumeProvider(MonthlyVolumeProvider):
    """
    Offline stand-in for a keyword metrics API.

    Produces `months` observations ending at `end` (inclusive):
    base + growth * i, scaled by a yearly sine of amplitude `seasonality`
    and by uniform noise of +-`noise`. With `dropout` > 0 a month's volume is
    reported missing with that probability. The same seed and keyword always
    give the same series.
    """

    def __init__(
            self,
            base_volume: float = 1000.0,
            growth_per_month: float = 0.0,
            noise: float = 0.1,
            seasonality: float = 0.0,
            dropout: float = 0.0,
            months: int = 24,
            seed: int = 0,
            end: Optional[date] = None,
    ):
        self.base_volume = base_volume
        self.growth_per_month = growth_per_month
        self.noise = noise
        self.seasonality = seasonality
        self.dropout = dropout
        self.months = months
        self.seed = seed
        self.end = end or date.today().replace(day=1)

    def _rng(self, keyword: str) -> np.random.Generator:
        keyword_key = sum(ord(c) for c in keyword)
        return np.random.default_rng([self.seed, keyword_key])

    def generate(self, keyword: str) -> List[Optional[int]]:
        rng = self._rng(keyword)
        x = np.arange(self.months)

        trend = self.base_volume + self.growth_per_month * x
        season = 1 + self.seasonality * np.sin(2 * np.pi * x / 12)
        jitter = 1 + (rng.random(self.months) - 0.5) * 2 * self.noise
        signal = np.clip(np.round(trend * season * jitter), 0, None).astype(int)

        missing = rng.random(self.months) < self.dropout
        return [None if gap else int(v) for v, gap in zip(signal, missing)]

    def fetch_monthly_volumes(
            self,
            keyword: str,
            location_id: int,
            language_id: int
    ) -> List[MonthlyObservation]:
        volumes = self.generate(keyword)
        end_index = self.end.year * 12 + (self.end.month - 1)

        observations = []
        for i, volume in enumerate(volumes):
            idx = end_index - (self.months - 1 - i)
            observations.append(MonthlyObservation(year=idx // 12, month=idx % 12 + 1, volume=volume))

        logger.info(f"Generated {len(observations)} synthetic monthly volumes for '{keyword}'")
        return observations
