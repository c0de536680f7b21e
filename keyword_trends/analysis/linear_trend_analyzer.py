"""
Linear trend detection over (at most) twelve months of search volume.

The slope comes from ordinary least squares on (month index, volume) pairs.
Significance is a coarse two-level proxy: |t| is compared against the
two-tailed 99% Student's t critical value and the p-value is reported as
0.005 (significant) or 0.5 (not significant). It is not a continuous p-value.

Degenerate input never raises; the result is a stable verdict with an
"N/A (...)" confidence label.
"""
import logging
import math
from typing import List, Optional, Sequence, Tuple

from keyword_trends.domain.trend_analyzer import TrendAnalyzer
from keyword_trends.domain.trend_result import TrendResult

logger = logging.getLogger(__name__)

MIN_REGRESSION_POINTS = 3
EPSILON = 1e-9
STABLE_SLOPE_EPSILON = 1e-6

SIGNIFICANCE_LEVEL = 0.01
SIGNIFICANT_P_VALUE = 0.005
NOT_SIGNIFICANT_P_VALUE = 0.5

CONFIDENT = "99% confident"
NOT_SIGNIFICANT = "Not significant at 99%"

# Keyed by the number of regression points (df = n - 2).
_CRITICAL_T_99 = {
    3: 63.657,
    4: 9.925,
    5: 5.841,
    6: 4.604,
    7: 4.032,
    8: 3.707,
    9: 3.499,
    10: 3.355,
    11: 3.25,
}
_CRITICAL_T_99_DEFAULT = 3.169  # n >= 12 (df = 10)

Stats = Tuple[Optional[float], Optional[float], Optional[float], Optional[float], Optional[float]]


def critical_t_value(n_regression: int) -> float:
    return _CRITICAL_T_99.get(n_regression, _CRITICAL_T_99_DEFAULT)


def _is_missing(volume: Optional[float]) -> bool:
    return volume is None or (isinstance(volume, float) and math.isnan(volume))


def describe_volumes(values: Sequence[float]) -> Stats:
    """
    Returns (average, median, min, max, population std) of the given values,
    all None for an empty sequence. Works on a sorted copy.
    """
    n = len(values)
    if n == 0:
        return None, None, None, None, None

    ordered = sorted(values)
    average = sum(ordered) / n
    mid = n // 2
    median = ordered[mid] if n % 2 != 0 else (ordered[mid - 1] + ordered[mid]) / 2
    variance = sum((v - average) ** 2 for v in ordered) / n

    return average, median, ordered[0], ordered[-1], math.sqrt(variance)


def analyze_monthly_trend(monthly_volumes: Sequence[Optional[float]]) -> TrendResult:
    """
    Classifies a chronologically ordered series of monthly volumes as trending,
    declining or stable. Missing months (None / NaN) are skipped but keep their
    position, so the regression x-axis is the original month index.
    """
    valid: List[float] = [float(v) for v in monthly_volumes if not _is_missing(v)]
    average, median, minimum, maximum, std = describe_volumes(valid)
    processed = len(valid)

    def verdict(is_trending: bool, is_declining: bool, is_stable: bool,
                confidence: str, slope: float, p_value: float) -> TrendResult:
        return TrendResult(
            is_trending=is_trending,
            is_declining=is_declining,
            is_stable=is_stable,
            confidence=confidence,
            slope=slope,
            p_value=p_value,
            average_volume=average,
            median_volume=median,
            min_volume=minimum,
            max_volume=maximum,
            std_deviation=std,
            processed_data_points=processed,
        )

    def not_available(reason: str, slope: float = 0.0) -> TrendResult:
        logger.debug(f"Trend not computed: {reason} ({processed} valid points)")
        return verdict(False, False, True, f"N/A ({reason})", slope, 1.0)

    points = [(float(x), float(y)) for x, y in enumerate(monthly_volumes) if not _is_missing(y)]
    n = len(points)
    if n < MIN_REGRESSION_POINTS:
        return not_available("Insufficient data for trend")

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for x, y in points:
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x

    denominator = n * sum_x2 - sum_x * sum_x
    if abs(denominator) < EPSILON:
        return not_available("Denominator zero in regression")

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    ss_res = 0.0
    for x, y in points:
        ss_res += (y - (slope * x + intercept)) ** 2

    df_residual = n - 2
    if df_residual <= 0:
        return not_available("Not enough DF for trend", slope)

    mse = ss_res / df_residual
    s_var_x = sum_x2 - (sum_x * sum_x) / n
    if abs(s_var_x) < EPSILON:
        return not_available("sVarX zero in regression", slope)

    se_slope = math.sqrt(mse / s_var_x)

    if abs(se_slope) < EPSILON:
        # exact fit: any non-zero slope is significant
        p_value = 0.0 if abs(slope) > EPSILON else 1.0
        significant = p_value < SIGNIFICANCE_LEVEL
        return verdict(
            is_trending=slope > EPSILON and significant,
            is_declining=slope < -EPSILON and significant,
            is_stable=abs(slope) <= EPSILON or not significant,
            confidence=CONFIDENT if significant else NOT_SIGNIFICANT,
            slope=slope,
            p_value=p_value,
        )

    t_statistic = slope / se_slope
    critical_t = critical_t_value(n)
    p_value = SIGNIFICANT_P_VALUE if abs(t_statistic) > critical_t else NOT_SIGNIFICANT_P_VALUE
    significant = p_value < SIGNIFICANCE_LEVEL
    logger.debug(f"OLS n={n} slope={slope:.4f} se={se_slope:.4f} t={t_statistic:.3f} critical={critical_t}")

    return verdict(
        is_trending=significant and slope > 0,
        is_declining=significant and slope < 0,
        is_stable=not significant or abs(slope) < STABLE_SLOPE_EPSILON,
        confidence=CONFIDENT if significant else NOT_SIGNIFICANT,
        slope=slope,
        p_value=p_value,
    )


class LinearTrendAnalyzer(TrendAnalyzer):
    def evaluate(self, monthly_volumes: Sequence[Optional[float]]) -> TrendResult:
        return analyze_monthly_trend(monthly_volumes)
