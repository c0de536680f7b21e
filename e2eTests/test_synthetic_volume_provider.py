from datetime import date

import numpy as np

from keyword_trends.infra.synthetic_volume_provider import SyntheticVolumeProvider


def test_same_seed_and_keyword_is_reproducible():
    a = SyntheticVolumeProvider(noise=0.3, seed=11, end=date(2025, 3, 1))
    b = SyntheticVolumeProvider(noise=0.3, seed=11, end=date(2025, 3, 1))

    assert a.fetch_monthly_volumes("seo", 2840, 1000) == b.fetch_monthly_volumes("seo", 2840, 1000)


def test_different_keywords_get_different_noise():
    provider = SyntheticVolumeProvider(noise=0.3, seed=11)

    assert provider.generate("seo") != provider.generate("sem")


def test_months_end_at_reference_month():
    observations = SyntheticVolumeProvider(months=14, end=date(2025, 2, 1)).fetch_monthly_volumes("kw", 0, 0)

    assert len(observations) == 14
    assert (observations[0].year, observations[0].month) == (2024, 1)
    assert (observations[-1].year, observations[-1].month) == (2025, 2)


def test_dropout_produces_missing_months():
    volumes = SyntheticVolumeProvider(dropout=0.5, months=120, seed=5).generate("kw")

    missing = sum(v is None for v in volumes)
    assert 20 < missing < 100


def test_volumes_are_nonnegative_ints():
    volumes = SyntheticVolumeProvider(base_volume=10, growth_per_month=-5, noise=0.5, seed=2).generate("kw")

    assert all(isinstance(v, int) and v >= 0 for v in volumes)
    assert volumes[-1] == 0


def test_noise_free_series_follows_growth():
    volumes = SyntheticVolumeProvider(base_volume=100, growth_per_month=10, noise=0.0, months=6).generate("kw")

    assert volumes == list(np.arange(100, 160, 10))
