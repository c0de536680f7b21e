from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TrendResult:
    is_trending: bool
    is_declining: bool
    is_stable: bool
    confidence: str
    slope: float
    p_value: float
    average_volume: Optional[float]
    median_volume: Optional[float]
    min_volume: Optional[float]
    max_volume: Optional[float]
    std_deviation: Optional[float]
    processed_data_points: int

    @property
    def coefficient_of_variation(self) -> Optional[float]:
        """std / mean * 100, or None when either is missing or the mean is not positive."""
        if self.std_deviation is None or self.average_volume is None or self.average_volume <= 0:
            return None
        return self.std_deviation / self.average_volume * 100

    @property
    def is_significant(self) -> bool:
        return self.p_value < 0.01

    @classmethod
    def unavailable(cls, processed_data_points: int = 0, confidence: str = "N/A") -> "TrendResult":
        return cls(
            is_trending=False,
            is_declining=False,
            is_stable=True,
            confidence=confidence,
            slope=0.0,
            p_value=1.0,
            average_volume=None,
            median_volume=None,
            min_volume=None,
            max_volume=None,
            std_deviation=None,
            processed_data_points=processed_data_points,
        )
