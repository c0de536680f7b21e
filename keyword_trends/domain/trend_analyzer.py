from abc import ABC, abstractmethod
from typing import Optional, Sequence

from keyword_trends.domain.trend_result import TrendResult


class TrendAnalyzer(ABC):
    @abstractmethod
    def evaluate(self, monthly_volumes: Sequence[Optional[float]]) -> TrendResult:
        pass
