from dataclasses import dataclass

from keyword_trends.domain.trend_result import TrendResult

HIGH_CV = 70
MEDIUM_CV = 50
STABLE_EXTREME_CV = 80
HIGH_SLOPE_RATIO = 0.5
MEDIUM_SLOPE_RATIO = 0.3


@dataclass(frozen=True)
class AiInfluenceAssessment:
    is_likely_ai_affected: bool
    judgment_confidence: str  # "high" | "medium" | "low" | "none"
    reasoning: str


def assess_ai_influence(result: TrendResult) -> AiInfluenceAssessment:
    """
    Heuristic guess whether a keyword's interest curve looks AI-driven.

    Significant upward trends are graded by volatility (CV) and by how large the
    monthly slope is relative to the average volume. A stable series is only
    flagged when its volatility is extreme.
    """
    cv = result.coefficient_of_variation
    average = result.average_volume or 0
    rising = result.is_trending and result.is_significant

    if rising:
        if cv is not None and cv > HIGH_CV and result.slope > average * HIGH_SLOPE_RATIO:
            return AiInfluenceAssessment(
                True, "high",
                "Significant upward trend with very high slope and extreme volatility, "
                "suggesting strong AI-related influence.",
            )
        if cv is not None and cv > MEDIUM_CV:
            return AiInfluenceAssessment(
                True, "medium",
                "Significant upward trend with high volatility, potentially AI-influenced.",
            )
        if result.slope > average * MEDIUM_SLOPE_RATIO:
            return AiInfluenceAssessment(
                True, "medium",
                "Significant upward trend with a strong growth rate, possibly AI-influenced.",
            )
        return AiInfluenceAssessment(
            True, "low",
            "Keyword is trending upwards significantly, which could have some AI-related drivers.",
        )

    if result.is_stable and cv is not None and cv > STABLE_EXTREME_CV:
        return AiInfluenceAssessment(
            True, "low",
            "Overall stable trend but with extreme monthly volatility, "
            "which might indicate sporadic AI-driven interest.",
        )

    return AiInfluenceAssessment(False, "none", "Standard trend observed.")
