from __future__ import annotations

import logging
import math
import os
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Final, List, Optional, Sequence

import requests

from keyword_trends.domain.monthly_observation import MonthlyObservation
from keyword_trends.domain.volume_provider import MonthlyVolumeProvider

logger = logging.getLogger(__name__)

_MONTHS: Final[dict[str, int]] = {
    name: idx for idx, name in enumerate(
        ["JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE", "JULY",
         "AUGUST", "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER"],
        start=1,
    )
}

_RETRY_IN = re.compile(r"Retry in (\d+) seconds?", re.IGNORECASE)


class RateLimitedError(RuntimeError):
    def __init__(self, message: str, retry_after_sec: float) -> None:
        super().__init__(message)
        self.retry_after_sec = retry_after_sec


@dataclass(frozen=True)
class GoogleAdsCredentials:
    developer_token: str = ""
    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""
    login_customer_id: str = ""
    customer_id: str = ""

    @classmethod
    def from_env(cls) -> GoogleAdsCredentials:
        return cls(
            developer_token=os.environ.get("DEVELOPER_TOKEN", ""),
            client_id=os.environ.get("CLIENT_ID", ""),
            client_secret=os.environ.get("CLIENT_SECRET", ""),
            refresh_token=os.environ.get("REFRESH_TOKEN", ""),
            login_customer_id=os.environ.get("LOGIN_CUSTOMER_ID", ""),
            customer_id=os.environ.get("CUSTOMER_ID", ""),
        )


def retry_delay_from(message: str, default_sec: float = 5.0) -> float:
    match = _RETRY_IN.search(message)
    if match:
        return int(match.group(1)) + 0.5
    return default_sec


def _parse_month(value: Any) -> Optional[int]:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if value.isdigit():
            return int(value)
        return _MONTHS.get(value.upper())
    return None


def _parse_volume(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        volume = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(volume):
        return None
    return int(volume) if volume.is_integer() else volume


def _parse_entry(entry: dict[str, Any]) -> Optional[MonthlyObservation]:
    month = _parse_month(entry.get("month"))
    try:
        year = int(entry.get("year"))
    except (TypeError, ValueError):
        logger.warning(f"Skipping monthly volume without a valid year: {entry}")
        return None
    if month is None or not 1 <= month <= 12:
        logger.warning(f"Skipping monthly volume without a valid month: {entry}")
        return None
    return MonthlyObservation(
        year=year,
        month=month,
        volume=_parse_volume(entry.get("monthlySearches")),
    )


def parse_monthly_volumes(payload: dict[str, Any]) -> List[MonthlyObservation]:
    """Historical monthly volumes of the first keyword idea in a generateKeywordIdeas response."""
    try:
        results = payload.get("results") or []
        if not results:
            return []

        metrics = (results[0].get("keywordIdeaMetrics") or {}).get("monthlySearchVolumes") or []
        parsed = [_parse_entry(entry) for entry in metrics]
    except (KeyError, IndexError, ValueError, TypeError, AttributeError) as exc:
        raise RuntimeError(f"Invalid Google Ads response: {payload}") from exc

    return [o for o in parsed if o is not None]


class GoogleAdsClient(MonthlyVolumeProvider):
    _TOKEN_URL: Final[str] = "https://oauth2.googleapis.com/token"
    _API_BASE: Final[str] = "https://googleads.googleapis.com"
    _API_VERSION: Final[str] = "v19"

    def __init__(
            self,
            credentials: GoogleAdsCredentials,
            timeout: float = 10.0,
            max_retries: int = 3,
            session: Optional[requests.Session] = None,
            sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.credentials = credentials
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self._sleep = sleep

    def check_ready(self) -> None:
        if not self.credentials.developer_token or not self.credentials.client_id:
            logger.error("Missing Google Ads API credentials configuration.")
            raise RuntimeError("Missing Google Ads API credentials.")

    def _access_token(self) -> str:
        data = {
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "refresh_token": self.credentials.refresh_token,
            "grant_type": "refresh_token",
        }
        try:
            r = self.session.post(self._TOKEN_URL, data=data, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise RuntimeError("Failed to get access token") from exc

        try:
            return r.json()["access_token"]
        except (KeyError, ValueError) as exc:
            raise RuntimeError("Invalid OAuth token response") from exc

    def generate_keyword_ideas(
            self,
            keywords: Sequence[str],
            location_id: int,
            language_id: int
    ) -> dict[str, Any]:
        url = (
            f"{self._API_BASE}/{self._API_VERSION}/customers/"
            f"{self.credentials.customer_id}:generateKeywordIdeas"
        )
        body = {
            "language": f"languageConstants/{language_id}",
            "geoTargetConstants": [f"geoTargetConstants/{location_id}"],
            "includeAdultKeywords": False,
            "keywordPlanNetwork": "GOOGLE_SEARCH",
            "keywordSeed": {"keywords": list(keywords)},
        }
        headers = {
            "Authorization": f"Bearer {self._access_token()}",
            "developer-token": self.credentials.developer_token,
            "login-customer-id": self.credentials.login_customer_id,
        }

        logger.info(f"Sending request to Google Ads API: {url}")
        try:
            r = self.session.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RuntimeError(f"Google Ads request failed ({url})") from exc

        if r.status_code == 429:
            raise RateLimitedError(
                f"Google Ads rate limit (429): {r.text}",
                retry_after_sec=retry_delay_from(r.text),
            )
        try:
            r.raise_for_status()
        except requests.HTTPError as exc:
            raise RuntimeError(f"API request failed ({url}): {r.status_code} {r.text}") from exc

        try:
            data: dict[str, Any] = r.json()
            count = len(data.get("results") or [])
        except (ValueError, TypeError, AttributeError) as exc:
            raise RuntimeError(f"Invalid Google Ads response: {r.text}") from exc

        logger.info(f"Received {count} keyword ideas")
        return data

    def generate_keyword_ideas_with_retry(
            self,
            keywords: Sequence[str],
            location_id: int,
            language_id: int
    ) -> dict[str, Any]:
        attempt = 0
        while True:
            attempt += 1
            try:
                return self.generate_keyword_ideas(keywords, location_id, language_id)
            except RateLimitedError as exc:
                if attempt >= self.max_retries:
                    logger.error(f"Giving up after {attempt} rate-limited attempts")
                    raise
                logger.warning(f"Attempt {attempt} rate limited; retrying in {exc.retry_after_sec:.1f}s")
                self._sleep(exc.retry_after_sec)

    def fetch_monthly_volumes(
            self,
            keyword: str,
            location_id: int,
            language_id: int
    ) -> List[MonthlyObservation]:
        payload = self.generate_keyword_ideas_with_retry([keyword], location_id, language_id)
        observations = parse_monthly_volumes(payload)
        logger.info(f"Fetched {len(observations)} monthly volumes for '{keyword}'")
        return observations
