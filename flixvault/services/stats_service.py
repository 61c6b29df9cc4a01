"""Statistics over a user's watchlist collection"""

import math
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..config import settings
from ..exceptions import InvalidCollectionError
from ..schemas.lists import Category, ListItem
from ..schemas.stats import (
    DecadeCount,
    StatisticsSnapshot,
    StatsDistributions,
    StatsOverview,
    StatsTopStats,
    YearCount,
)
from .normalizer import parse_timestamp

_YEAR_RE = re.compile(r"\b(\d{4})\b")
_NUMBER = r"(\d+(?:\.\d+)?)"
_HOURS_RE = re.compile(_NUMBER + r"\s*h", re.IGNORECASE)
_MINUTES_RE = re.compile(_NUMBER + r"\s*m", re.IGNORECASE)
_MIN_RE = re.compile(_NUMBER + r"\s*min", re.IGNORECASE)
_LEADING_RE = re.compile(r"^\s*" + _NUMBER)

# Lower bound (inclusive) -> label, highest first
RATING_BUCKETS: Tuple[Tuple[float, str], ...] = (
    (9.0, "9+"),
    (8.0, "8-9"),
    (7.0, "7-8"),
    (6.0, "6-7"),
    (5.0, "5-6"),
)
LOWEST_BUCKET = "<5"


def extract_year(release_date: Any) -> Optional[int]:
    """First standalone 4-digit run in a release indicator"""
    if isinstance(release_date, bool):
        return None
    if isinstance(release_date, int):
        release_date = str(release_date)
    if not isinstance(release_date, str) or not release_date:
        return None
    match = _YEAR_RE.search(release_date)
    return int(match.group(1)) if match else None


def parse_runtime_minutes(runtime: Any) -> float:
    """
    Minutes in a runtime value; 0 when it can't be read.

    Accepts numbers (already minutes), "2h 30m" style, "120 min" and a bare
    leading number.
    """
    if isinstance(runtime, bool):
        return 0
    if isinstance(runtime, (int, float)):
        return runtime if math.isfinite(runtime) and runtime > 0 else 0
    if not isinstance(runtime, str) or not runtime.strip():
        return 0

    hours = _HOURS_RE.search(runtime)
    if hours:
        total = float(hours.group(1)) * 60
        minutes = _MINUTES_RE.search(runtime, hours.end())
        if minutes:
            total += float(minutes.group(1))
        return total

    minutes = _MIN_RE.search(runtime)
    if minutes:
        return float(minutes.group(1))

    leading = _LEADING_RE.match(runtime)
    if leading:
        return float(leading.group(1))
    return 0


def rating_bucket(rating: float) -> str:
    for lower, label in RATING_BUCKETS:
        if rating >= lower:
            return label
    return LOWEST_BUCKET


def month_key(moment: datetime) -> str:
    """YYYY-MM in UTC"""
    return moment.astimezone(timezone.utc).strftime("%Y-%m")


def _ranked(counts: Mapping[int, int]) -> List[Tuple[int, int]]:
    """Count descending, then most recent first"""
    return sorted(counts.items(), key=lambda entry: (-entry[1], -entry[0]))


def _validated(collection: Any) -> Dict[Category, List[ListItem]]:
    if not isinstance(collection, Mapping):
        raise InvalidCollectionError(
            f"Collection must be a mapping, got {type(collection).__name__}"
        )

    checked = {}
    for category in Category:
        items = collection.get(category, collection.get(category.value, []))
        if not isinstance(items, (list, tuple)):
            raise InvalidCollectionError(
                f"'{category.value}' must be a list, got {type(items).__name__}"
            )
        for item in items:
            if not isinstance(item, ListItem):
                raise InvalidCollectionError(
                    f"'{category.value}' holds a {type(item).__name__}, not a ListItem"
                )
        checked[category] = list(items)
    return checked


def aggregate(
    collection: Mapping,
    account_created_at: Optional[datetime] = None,
    now: Optional[datetime] = None,
    top_years: Optional[int] = None,
) -> StatisticsSnapshot:
    """
    Derive a statistics snapshot from a collection.

    Pure: the collection is never modified. Raises InvalidCollectionError if
    the collection is not a mapping of category -> list of ListItem.
    """
    lists = _validated(collection)
    now = parse_timestamp(now) or datetime.now(timezone.utc)
    top_years = settings.STATS_TOP_YEARS if top_years is None else top_years

    all_items = [item for category in Category for item in lists[category]]
    list_distribution = {category.value: len(lists[category]) for category in Category}

    total_watch_time = sum(
        parse_runtime_minutes(item.runtime) for item in lists[Category.WATCHED]
    )

    rated = [item.rating for item in all_items if item.rating is not None]
    average_rating = sum(rated) / len(rated) if rated else 0.0

    with_runtime = [item.runtime for item in all_items if item.runtime]
    average_runtime = (
        sum(parse_runtime_minutes(runtime) for runtime in with_runtime)
        / len(with_runtime)
        if with_runtime
        else 0
    )

    year_distribution: Counter = Counter()
    for item in all_items:
        year = extract_year(item.release_date)
        if year is not None:
            year_distribution[year] += 1

    decade_distribution: Counter = Counter()
    for year, count in year_distribution.items():
        decade_distribution[year // 10 * 10] += count

    monthly_distribution = Counter(month_key(item.added_at) for item in all_items)
    current_month = month_key(now)
    current_year = current_month[:4]
    movies_this_year = sum(
        count
        for key, count in monthly_distribution.items()
        if key.startswith(current_year + "-")
    )

    rating_distribution = {label: 0 for _, label in RATING_BUCKETS}
    rating_distribution[LOWEST_BUCKET] = 0
    for rating in rated:
        rating_distribution[rating_bucket(rating)] += 1

    account_age = 0
    created = parse_timestamp(account_created_at)
    if created is not None and created < now:
        account_age = (now - created).days

    return StatisticsSnapshot(
        overview=StatsOverview(
            total_movies=len(all_items),
            watched_count=list_distribution[Category.WATCHED.value],
            watching_count=list_distribution[Category.WATCHING.value],
            planned_count=list_distribution[Category.PLANNED.value],
            onhold_count=list_distribution[Category.ONHOLD.value],
            dropped_count=list_distribution[Category.DROPPED.value],
            total_watch_time=round(total_watch_time),
            average_rating=round(average_rating, 1),
            average_runtime=round(average_runtime),
            movies_this_month=monthly_distribution.get(current_month, 0),
            movies_this_year=movies_this_year,
            account_age=account_age,
        ),
        distributions=StatsDistributions(
            year_distribution=dict(year_distribution),
            decade_distribution=dict(decade_distribution),
            monthly_distribution=dict(monthly_distribution),
            rating_distribution=rating_distribution,
            list_distribution=list_distribution,
        ),
        top_stats=StatsTopStats(
            most_common_years=[
                YearCount(year=year, count=count)
                for year, count in _ranked(year_distribution)[:top_years]
            ],
            most_common_decades=[
                DecadeCount(decade=decade, count=count)
                for decade, count in _ranked(decade_distribution)
            ],
        ),
    )
