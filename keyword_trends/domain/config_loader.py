import json
from dataclasses import dataclass, field
from typing import List

from keyword_trends.domain.monthly_observation import MAX_TREND_MONTHS


@dataclass
class TrendConfig:
    keywords: List[str] = field(default_factory=list)
    region: str = "US"
    language: str = "en"
    history_months: int = MAX_TREND_MONTHS
    max_retries: int = 3
    timeout: float = 10.0


"""
{
  "keywords": ["ai seo", "keyword research"],
  "region": "TW",
  "language": "zh-TW",
  "max_retries": 3
}
"""


def load_config(path: str) -> TrendConfig:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    raw_keywords = data.get('keywords')
    if not isinstance(raw_keywords, list):
        raw_keywords = []
    keywords = [str(k).strip() for k in raw_keywords if str(k).strip()]
    if not keywords:
        raise ValueError(f"Config {path} must list at least one keyword under 'keywords'")

    return TrendConfig(
        keywords=keywords,
        region=data.get('region', "US"),
        language=data.get('language', "en"),
        history_months=int(data.get('history_months', MAX_TREND_MONTHS)),
        max_retries=int(data.get('max_retries', 3)),
        timeout=float(data.get('timeout', 10.0)),
    )
