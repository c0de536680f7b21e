import pytest

from keyword_trends.core.ai_influence import assess_ai_influence
from keyword_trends.domain.trend_result import TrendResult


def trend(slope: float, average: float, std: float, trending: bool = True,
          p_value: float = 0.005, stable: bool = False) -> TrendResult:
    return TrendResult(
        is_trending=trending,
        is_declining=False,
        is_stable=stable,
        confidence="99% confident" if p_value < 0.01 else "Not significant at 99%",
        slope=slope,
        p_value=p_value,
        average_volume=average,
        median_volume=average,
        min_volume=0,
        max_volume=average * 2,
        std_deviation=std,
        processed_data_points=12,
    )


@pytest.mark.parametrize("result, affected, confidence", [
    # CV 80, slope 60% of the average
    (trend(slope=60, average=100, std=80), True, "high"),
    # CV 80 but slope only 40%: falls to the CV > 50 rule
    (trend(slope=40, average=100, std=80), True, "medium"),
    # CV 55
    (trend(slope=1, average=100, std=55), True, "medium"),
    # CV 10, slope 35%
    (trend(slope=35, average=100, std=10), True, "medium"),
    # CV 10, slope 5%: trending alone
    (trend(slope=5, average=100, std=10), True, "low"),
    # stable but CV 90
    (trend(slope=0.1, average=100, std=90, trending=False, p_value=0.5, stable=True), True, "low"),
    # stable, CV 60
    (trend(slope=0.1, average=100, std=60, trending=False, p_value=0.5, stable=True), False, "none"),
    # trending flag without significance is not treated as rising
    (trend(slope=60, average=100, std=80, p_value=0.5), False, "none"),
])
def test_ai_influence_decision_table(result, affected, confidence):
    assessment = assess_ai_influence(result)

    assert assessment.is_likely_ai_affected is affected
    assert assessment.judgment_confidence == confidence
    assert assessment.reasoning


def test_missing_stats_only_uses_slope_rule():
    result = TrendResult.unavailable()
    assert assess_ai_influence(result).judgment_confidence == "none"


def test_stable_and_trending_overlap_prefers_rising():
    result = trend(slope=1e-10, average=100, std=90, p_value=0.0, stable=True)
    assert assess_ai_influence(result).judgment_confidence == "medium"
