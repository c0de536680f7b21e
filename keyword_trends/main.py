import argparse
import json
import logging
import sys
from dataclasses import asdict

from dotenv import load_dotenv

from keyword_trends.core.trend_report_service import KeywordTrendService
from keyword_trends.domain.config_loader import TrendConfig, load_config
from keyword_trends.domain.volume_provider import MonthlyVolumeProvider
from keyword_trends.infra.google_ads_client import GoogleAdsClient, GoogleAdsCredentials
from keyword_trends.infra.synthetic_volume_provider import SyntheticVolumeProvider

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("keyword_trends")


def build_provider(config: TrendConfig, offline: bool, seed: int) -> MonthlyVolumeProvider:
    if offline:
        return SyntheticVolumeProvider(growth_per_month=25.0, noise=0.15, seasonality=0.1, seed=seed)
    return GoogleAdsClient(
        credentials=GoogleAdsCredentials.from_env(),
        timeout=config.timeout,
        max_retries=config.max_retries,
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Monthly search-volume trend analysis")
    parser.add_argument("--config", default="trends.json", help="JSON run configuration")
    parser.add_argument("--offline", action="store_true", help="use synthetic volumes instead of Google Ads")
    parser.add_argument("--seed", type=int, default=0, help="seed for --offline data")
    args = parser.parse_args(argv)

    load_dotenv()

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        logger.error(f"Cannot load config {args.config}: {exc}")
        return 1

    # --- Initialize service ---
    service = KeywordTrendService(
        provider=build_provider(config, args.offline, args.seed),
        history_months=config.history_months,
    )

    exit_code = 0
    for keyword in config.keywords:
        influence = service.assess_keyword_ai_influence(keyword, config.region, config.language)
        if not influence.success:
            logger.error(f"Cannot analyze '{keyword}': {influence.error}")
            exit_code = 1
        print(json.dumps(asdict(influence), ensure_ascii=False, indent=2))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
