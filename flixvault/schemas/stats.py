"""Statistics schemas"""

from typing import Dict, List

from .base import CamelModel


class StatsOverview(CamelModel):
    """Headline numbers"""

    total_movies: int = 0
    watched_count: int = 0
    watching_count: int = 0
    planned_count: int = 0
    onhold_count: int = 0
    dropped_count: int = 0
    total_watch_time: int = 0  # minutes, watched only
    average_rating: float = 0.0
    average_runtime: int = 0
    movies_this_month: int = 0
    movies_this_year: int = 0
    account_age: int = 0  # days


class StatsDistributions(CamelModel):
    """Frequency tables"""

    year_distribution: Dict[int, int]
    decade_distribution: Dict[int, int]
    monthly_distribution: Dict[str, int]
    rating_distribution: Dict[str, int]
    list_distribution: Dict[str, int]


class YearCount(CamelModel):
    year: int
    count: int


class DecadeCount(CamelModel):
    decade: int
    count: int


class StatsTopStats(CamelModel):
    """Most frequent release years and decades"""

    most_common_years: List[YearCount]
    most_common_decades: List[DecadeCount]


class StatisticsSnapshot(CamelModel):
    """Read-only summary derived from a list collection"""

    overview: StatsOverview
    distributions: StatsDistributions
    top_stats: StatsTopStats

    class Config:
        frozen = True
