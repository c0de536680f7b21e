from abc import ABC, abstractmethod
from typing import List

from keyword_trends.domain.monthly_observation import MonthlyObservation


class MonthlyVolumeProvider(ABC):
    def check_ready(self) -> None:
        """Raises RuntimeError when the provider cannot serve requests."""

    @abstractmethod
    def fetch_monthly_volumes(
            self,
            keyword: str,
            location_id: int,
            language_id: int
    ) -> List[MonthlyObservation]:
        pass
