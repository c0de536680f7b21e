import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from keyword_trends.analysis.linear_trend_analyzer import LinearTrendAnalyzer, MIN_REGRESSION_POINTS
from keyword_trends.core.ai_influence import AiInfluenceAssessment, assess_ai_influence
from keyword_trends.core.message_composer import (
    NO_HISTORY_MESSAGE,
    compose_trend_message,
    insufficient_data_message,
)
from keyword_trends.domain.locales import resolve_language, resolve_location
from keyword_trends.domain.monthly_observation import MAX_TREND_MONTHS, MonthlyObservation, latest_volumes
from keyword_trends.domain.trend_analyzer import TrendAnalyzer
from keyword_trends.domain.trend_result import TrendResult
from keyword_trends.domain.volume_provider import MonthlyVolumeProvider

logger = logging.getLogger(__name__)


@dataclass
class KeywordTrendReport:
    keyword: str
    success: bool
    message: str
    trend: TrendResult
    monthly_data: List[MonthlyObservation] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class TrendJudgement:
    keyword: str
    success: bool
    message: str
    is_trending: bool = False
    is_declining: bool = False
    is_stable: bool = True
    confidence: str = "Error"
    slope: float = 0.0
    average_volume: Optional[float] = None
    std_deviation: Optional[float] = None
    coefficient_of_variation: Optional[float] = None
    error: Optional[str] = None


@dataclass
class KeywordAiInfluenceReport:
    keyword: str
    success: bool
    assessment: AiInfluenceAssessment
    trend_report: Optional[KeywordTrendReport] = None
    error: Optional[str] = None


class KeywordTrendService:
    """
    Fetches monthly volumes for a keyword, keeps the most recent `history_months`
    in chronological order and runs the trend analyzer over them.

    Invalid region/language codes and an unusable provider make
    check_keyword_trend raise before any request is made; trend_judgement and
    assess_keyword_ai_influence report them with success=False instead.
    Failures while fetching are always turned into reports with success=False.
    """

    def __init__(
            self,
            provider: MonthlyVolumeProvider,
            analyzer: Optional[TrendAnalyzer] = None,
            history_months: int = MAX_TREND_MONTHS
    ) -> None:
        self.provider = provider
        self.analyzer: TrendAnalyzer = analyzer or LinearTrendAnalyzer()
        self.history_months = history_months

    def check_keyword_trend(self, keyword: str, region: str, language: str) -> KeywordTrendReport:
        logger.info(f"Checking trend for '{keyword}' (region={region}, language={language})")

        language_id = resolve_language(language)
        location_id = resolve_location(region)
        self.provider.check_ready()

        try:
            observations = self.provider.fetch_monthly_volumes(keyword, location_id, language_id)
        except (RuntimeError, requests.RequestException) as exc:
            logger.error(f"Trend check for '{keyword}' failed: {exc}", exc_info=True)
            return KeywordTrendReport(
                keyword=keyword,
                success=False,
                message=f"Failed to analyze keyword trend: {exc}",
                trend=TrendResult.unavailable(confidence="Error"),
                error=str(exc),
            )

        if not observations:
            return KeywordTrendReport(
                keyword=keyword,
                success=True,
                message=NO_HISTORY_MESSAGE,
                trend=TrendResult.unavailable(),
            )

        recent, volumes = latest_volumes(observations, self.history_months)
        trend = self.analyzer.evaluate(volumes)

        if trend.processed_data_points < MIN_REGRESSION_POINTS:
            return KeywordTrendReport(
                keyword=keyword,
                success=True,
                message=insufficient_data_message(trend.processed_data_points),
                trend=TrendResult.unavailable(trend.processed_data_points),
                monthly_data=recent,
            )

        message = compose_trend_message(keyword, trend)
        logger.info(message)
        return KeywordTrendReport(
            keyword=keyword,
            success=True,
            message=message,
            trend=trend,
            monthly_data=recent,
        )

    def trend_judgement(self, keyword: str, region: str, language: str) -> TrendJudgement:
        try:
            report = self.check_keyword_trend(keyword, region, language)
        except (ValueError, RuntimeError) as exc:
            logger.error(f"Trend judgement for '{keyword}' failed: {exc}")
            return TrendJudgement(
                keyword=keyword,
                success=False,
                message=f"Failed to get trend judgement: {exc}",
                error=str(exc),
            )

        if not report.success:
            return TrendJudgement(
                keyword=keyword,
                success=False,
                message=report.message or "Trend analysis action produced an error.",
                error=report.error or "Trend analysis action failed",
            )

        trend = report.trend
        return TrendJudgement(
            keyword=keyword,
            success=True,
            message=report.message,
            is_trending=trend.is_trending,
            is_declining=trend.is_declining,
            is_stable=trend.is_stable,
            confidence=trend.confidence,
            slope=trend.slope,
            average_volume=trend.average_volume,
            std_deviation=trend.std_deviation,
            coefficient_of_variation=trend.coefficient_of_variation,
        )

    def assess_keyword_ai_influence(self, keyword: str, region: str, language: str) -> KeywordAiInfluenceReport:
        try:
            report = self.check_keyword_trend(keyword, region, language)
        except (ValueError, RuntimeError) as exc:
            logger.error(f"AI influence assessment for '{keyword}' failed: {exc}")
            return KeywordAiInfluenceReport(
                keyword=keyword,
                success=False,
                assessment=AiInfluenceAssessment(False, "none", f"Failed to assess AI influence: {exc}"),
                error=str(exc),
            )

        if not report.success:
            return KeywordAiInfluenceReport(
                keyword=keyword,
                success=False,
                assessment=AiInfluenceAssessment(
                    False, "none", "Could not assess AI impact due to trend analysis error."
                ),
                trend_report=report,
                error=report.error or "Underlying trend analysis failed.",
            )

        assessment = assess_ai_influence(report.trend)
        logger.info(
            f"AI influence for '{keyword}': affected={assessment.is_likely_ai_affected}, "
            f"confidence={assessment.judgment_confidence}"
        )
        return KeywordAiInfluenceReport(
            keyword=keyword,
            success=True,
            assessment=assessment,
            trend_report=report,
        )
