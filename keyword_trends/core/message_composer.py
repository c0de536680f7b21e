from keyword_trends.domain.trend_result import TrendResult

NO_HISTORY_MESSAGE = "No historical search volume data found for this keyword."

HIGH_VOLATILITY_CV = 30
MODERATE_VOLATILITY_CV = 15


def insufficient_data_message(found: int) -> str:
    return (
        f"Insufficient valid historical data points (found {found}, need at least 3) "
        f"for trend analysis."
    )


def format_p_value(p_value: float) -> str:
    if p_value == 0.005:
        return "<0.01"
    return f"{p_value:.3f}"


def volatility_label(cv: float) -> str:
    if cv > HIGH_VOLATILITY_CV:
        return "high"
    if cv > MODERATE_VOLATILITY_CV:
        return "moderate"
    return "low"


def compose_trend_message(keyword: str, result: TrendResult) -> str:
    """
    Renders a one-paragraph summary of a trend result for display next to the keyword.
    """
    message = f'Trend analysis for "{keyword}": '
    if result.is_trending:
        message += "Trending upwards significantly."
    elif result.is_declining:
        message += "Declining significantly."
    else:
        message += "Overall linear trend is stable or not statistically significant at 99% confidence."

    message += (
        f" (Slope: {result.slope:.2f}, P-value equivalent: {format_p_value(result.p_value)}, "
        f"{result.confidence})."
    )

    cv = result.coefficient_of_variation
    if cv is not None:
        message += f" Monthly search volume shows {volatility_label(cv)} volatility (CV: {cv:.1f}%)."
    elif result.std_deviation is not None:
        message += f" Standard deviation of volumes: {result.std_deviation:.1f}."

    return message
