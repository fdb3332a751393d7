"""
Shared fixtures: a small league history.

Ferencvaros vs Ujpest meetings (either venue): 6 Ferencvaros wins,
2 draws, 2 Ujpest wins. One Ferencvaros fixture is not played yet.
"""

from datetime import date

import pytest

from winmix.domain.entities.entities import MatchRecord
from winmix.infrastructure.cache.cache_service import CacheService
from winmix.infrastructure.cache.redis_client import RedisClient
from winmix.infrastructure.data_sources.in_memory import InMemoryMatchSource


# (date, home, away, home_score, away_score, season)
SAMPLE_MATCHES = [
    (date(2023, 8, 5), "Ferencvaros", "Ujpest", 2, 0, "2023/24"),
    (date(2023, 9, 10), "Ujpest", "Ferencvaros", 1, 3, "2023/24"),
    (date(2023, 10, 15), "Ferencvaros", "Ujpest", 1, 1, "2023/24"),
    (date(2023, 11, 20), "Ujpest", "Ferencvaros", 2, 1, "2023/24"),
    (date(2024, 2, 3), "Ferencvaros", "Ujpest", 4, 1, "2023/24"),
    (date(2024, 3, 9), "Ujpest", "Ferencvaros", 0, 2, "2023/24"),
    (date(2024, 8, 10), "Ferencvaros", "Ujpest", 3, 0, "2024/25"),
    (date(2024, 9, 14), "Ujpest", "Ferencvaros", 1, 1, "2024/25"),
    (date(2024, 10, 19), "Ferencvaros", "Ujpest", 1, 2, "2024/25"),
    (date(2024, 11, 23), "Ujpest", "Ferencvaros", 0, 1, "2024/25"),
    (date(2024, 12, 1), "Honved", "Debrecen", 0, 0, "2024/25"),
    (date(2024, 12, 7), "Ferencvaros", "Honved", 2, 0, "2024/25"),
    (date(2024, 12, 14), "Debrecen", "Ujpest", 1, 3, "2024/25"),
    (date(2025, 1, 10), "Honved", "Ujpest", 2, 2, "2024/25"),
    (date(2025, 2, 1), "Debrecen", "Ferencvaros", 0, 1, "2024/25"),
    (date(2025, 3, 1), "Ferencvaros", "Honved", None, None, "2024/25"),
]


def make_match(match_date, home, away, home_score=None, away_score=None, season="2024/25", **kwargs):
    return MatchRecord(
        match_date=match_date,
        home_team=home,
        away_team=away,
        home_score=home_score,
        away_score=away_score,
        season=season,
        **kwargs,
    )


@pytest.fixture
def sample_matches():
    """Sample match history, oldest first."""
    return [make_match(*row, competition="NB I") for row in SAMPLE_MATCHES]


@pytest.fixture
def data_source(sample_matches):
    """In-memory data source over the sample history."""
    return InMemoryMatchSource(sample_matches)


@pytest.fixture
def empty_source():
    """Data source with no matches at all."""
    return InMemoryMatchSource([])


@pytest.fixture
def cache():
    """Memory-only cache service."""
    return CacheService(redis_client=RedisClient(enabled=False))


@pytest.fixture
def match_factory():
    """Factory building a MatchRecord from positional values."""
    return make_match
