from typing import Dict

# Google Ads geo target constants
LOCATION_CODES: Dict[str, int] = {
    "TW": 2158,
    "HK": 2344,
    "US": 2840,
    "JP": 2392,
    "UK": 2826,
    "CN": 2156,
    "AU": 2036,
    "CA": 2124,
    "SG": 2702,
    "MY": 2458,
    "DE": 2276,
    "FR": 2250,
    "KR": 2410,
    "IN": 2356,
}

# Google Ads language constants
LANGUAGE_CODES: Dict[str, int] = {
    "zh_TW": 1018,
    "zh_CN": 1000,
    "en": 1000,
    "ja": 1005,
    "ko": 1012,
    "ms": 1102,
    "fr": 1002,
    "de": 1001,
    "es": 1003,
}


def resolve_location(region: str) -> int:
    location_id = LOCATION_CODES.get(region.upper())
    if location_id is None:
        raise ValueError(f"Invalid region code: {region}.")
    return location_id


def resolve_language(language: str) -> int:
    language_id = LANGUAGE_CODES.get(language.replace("-", "_"))
    if language_id is None:
        raise ValueError(f"Invalid language code: {language}")
    return language_id
