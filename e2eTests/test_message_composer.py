import pytest

from keyword_trends.analysis.linear_trend_analyzer import analyze_monthly_trend
from keyword_trends.core.message_composer import (
    compose_trend_message,
    format_p_value,
    insufficient_data_message,
    volatility_label,
)


def test_trending_message():
    r = analyze_monthly_trend([0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100, 110])

    assert compose_trend_message("seo", r) == (
        'Trend analysis for "seo": Trending upwards significantly. '
        "(Slope: 10.00, P-value equivalent: 0.000, 99% confident). "
        "Monthly search volume shows high volatility (CV: 62.8%)."
    )


def test_declining_message_uses_below_one_percent():
    r = analyze_monthly_trend([200, 190, 185, 170, 160, 158, 140, 135, 120, 110, 105, 90])

    message = compose_trend_message("fax", r)

    assert message.startswith('Trend analysis for "fax": Declining significantly. (Slope: -9.94, ')
    assert "P-value equivalent: <0.01, 99% confident)." in message


def test_stable_message_with_zero_average_reports_std():
    r = analyze_monthly_trend([0, 0, 0])

    assert compose_trend_message("kw", r) == (
        'Trend analysis for "kw": Overall linear trend is stable or not statistically '
        "significant at 99% confidence. (Slope: 0.00, P-value equivalent: 1.000, "
        "Not significant at 99%). Standard deviation of volumes: 0.0."
    )


def test_low_volatility_stable_message():
    r = analyze_monthly_trend([100, 102, 98, 101, 99, 100, 103, 97, 100, 101, 99, 100])

    assert r.is_stable is True
    assert compose_trend_message("kw", r).endswith("shows low volatility (CV: 1.6%).")


@pytest.mark.parametrize("cv, label", [
    (30.1, "high"), (30.0, "moderate"), (15.1, "moderate"), (15.0, "low"), (0.0, "low"),
])
def test_volatility_buckets(cv, label):
    assert volatility_label(cv) == label


@pytest.mark.parametrize("p, text", [(0.005, "<0.01"), (0.5, "0.500"), (1.0, "1.000"), (0.0, "0.000")])
def test_format_p_value(p, text):
    assert format_p_value(p) == text


def test_insufficient_data_message():
    assert insufficient_data_message(1) == (
        "Insufficient valid historical data points (found 1, need at least 3) for trend analysis."
    )
