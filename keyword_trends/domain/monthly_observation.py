from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

MAX_TREND_MONTHS = 12


@dataclass(frozen=True)
class MonthlyObservation:
    year: int
    month: int
    volume: Optional[float]


def latest_volumes(
        observations: Sequence[MonthlyObservation],
        months: int = MAX_TREND_MONTHS
) -> Tuple[List[MonthlyObservation], List[Optional[float]]]:
    """
    Sorts a copy of the observations chronologically and keeps the most recent `months`.
    Returns the kept observations together with their volumes.
    """
    ordered = sorted(observations, key=lambda o: (int(o.year), o.month))
    kept = ordered[-months:] if months > 0 else []
    return kept, [o.volume for o in kept]
