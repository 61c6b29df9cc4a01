from datetime import datetime, timedelta, timezone

import pytest

from flixvault.exceptions import InvalidCollectionError
from flixvault.schemas.lists import Category, ListItem
from flixvault.services.stats_service import (
    aggregate,
    extract_year,
    parse_runtime_minutes,
    rating_bucket,
)

from .conftest import NOW


def item(imdb_id, **fields):
    fields.setdefault("added_at", NOW)
    return ListItem(imdb_id=imdb_id, **fields)


def collection(**lists):
    result = {category: [] for category in Category}
    for name, items in lists.items():
        result[Category(name)] = items
    return result


class TestRuntimeParsing:
    @pytest.mark.parametrize(
        "runtime, minutes",
        [
            (95, 95),
            (95.5, 95.5),
            ("120 min", 120),
            ("120min", 120),
            ("1h 30m", 90),
            ("2h 30min", 150),
            ("2h", 120),
            ("1 h 5 m", 65),
            ("90", 90),
            (" 88 minutes", 88),
            ("", 0),
            ("N/A", 0),
            ("unknown", 0),
            (None, 0),
            (True, 0),
            (-10, 0),
        ],
    )
    def test_formats(self, runtime, minutes):
        assert parse_runtime_minutes(runtime) == minutes


class TestYearExtraction:
    @pytest.mark.parametrize(
        "release, year",
        [
            ("2010-07-16", 2010),
            ("1999", 1999),
            ("31 Mar 1999", 1999),
            ("2019–2021", 2019),
            (1985, 1985),
            ("", None),
            ("N/A", None),
            ("12345", None),
            (None, None),
        ],
    )
    def test_extract(self, release, year):
        assert extract_year(release) == year


class TestRatingBuckets:
    @pytest.mark.parametrize(
        "rating, bucket",
        [
            (10.0, "9+"),
            (9.0, "9+"),
            (8.99, "8-9"),
            (8.0, "8-9"),
            (7.99, "7-8"),
            (7.0, "7-8"),
            (6.0, "6-7"),
            (5.0, "5-6"),
            (4.99, "<5"),
            (0.0, "<5"),
            (-1.0, "<5"),
        ],
    )
    def test_boundaries(self, rating, bucket):
        assert rating_bucket(rating) == bucket


class TestAggregate:
    def test_watched_example(self):
        lists = collection(
            watched=[
                item("tt1", runtime="120 min", rating=8.5, release_date="2010-07-16"),
                item("tt2", runtime="1h 30m", rating=None),
            ]
        )
        snapshot = aggregate(lists, now=NOW)

        assert snapshot.overview.watched_count == 2
        assert snapshot.overview.total_movies == 2
        assert snapshot.overview.total_watch_time == 210
        assert snapshot.overview.average_rating == 8.5
        assert snapshot.distributions.year_distribution == {2010: 1}
        assert snapshot.distributions.decade_distribution == {2010: 1}

    def test_rating_exactly_eight(self):
        snapshot = aggregate(collection(planned=[item("tt1", rating=8.0)]), now=NOW)
        assert snapshot.distributions.rating_distribution["8-9"] == 1
        assert snapshot.distributions.rating_distribution["7-8"] == 0

    def test_empty_collection(self):
        snapshot = aggregate(collection(), now=NOW)
        overview = snapshot.overview

        assert overview.total_movies == 0
        assert overview.total_watch_time == 0
        assert overview.average_rating == 0
        assert overview.average_runtime == 0
        assert overview.account_age == 0
        assert snapshot.distributions.year_distribution == {}
        assert snapshot.distributions.decade_distribution == {}
        assert snapshot.distributions.monthly_distribution == {}
        assert set(snapshot.distributions.rating_distribution.values()) == {0}
        assert snapshot.distributions.list_distribution == {
            "watched": 0,
            "watching": 0,
            "planned": 0,
            "onhold": 0,
            "dropped": 0,
        }
        assert snapshot.top_stats.most_common_years == []
        assert snapshot.top_stats.most_common_decades == []

    def test_watch_time_counts_watched_only(self):
        lists = collection(
            watched=[item("tt1", runtime="100")],
            watching=[item("tt2", runtime="50")],
        )
        snapshot = aggregate(lists, now=NOW)
        assert snapshot.overview.total_watch_time == 100
        assert snapshot.overview.average_runtime == 75

    def test_average_rating_across_categories(self):
        lists = collection(
            watched=[item("tt1", rating=9.0)],
            dropped=[item("tt2", rating=4.0), item("tt3", rating=0.0)],
            planned=[item("tt4")],
        )
        snapshot = aggregate(lists, now=NOW)
        assert snapshot.overview.average_rating == round(13.0 / 3, 1)
        assert snapshot.distributions.rating_distribution["<5"] == 2

    def test_average_runtime_skips_items_without_runtime(self):
        lists = collection(
            planned=[item("tt1", runtime="2h"), item("tt2"), item("tt3", runtime="N/A")]
        )
        # a non-empty runtime counts even when it parses to 0
        assert aggregate(lists, now=NOW).overview.average_runtime == 60

    def test_counts_per_category(self):
        lists = collection(
            watched=[item("a"), item("b")],
            watching=[item("c")],
            planned=[item("d"), item("e"), item("f")],
            onhold=[item("g")],
            dropped=[],
        )
        overview = aggregate(lists, now=NOW).overview
        assert (
            overview.watched_count,
            overview.watching_count,
            overview.planned_count,
            overview.onhold_count,
            overview.dropped_count,
            overview.total_movies,
        ) == (2, 1, 3, 1, 0, 7)

    def test_items_without_year_count_in_totals_only(self):
        lists = collection(planned=[item("tt1", release_date="TBA"), item("tt2")])
        snapshot = aggregate(lists, now=NOW)
        assert snapshot.overview.total_movies == 2
        assert snapshot.distributions.year_distribution == {}

    def test_top_years_tie_break_prefers_recent(self):
        releases = ["1994", "1999", "1999", "2010", "2010", "1985"]
        lists = collection(
            watched=[item(f"tt{n}", release_date=r) for n, r in enumerate(releases)]
        )
        top = aggregate(lists, now=NOW).top_stats

        assert [(y.year, y.count) for y in top.most_common_years] == [
            (2010, 2),
            (1999, 2),
            (1994, 1),
            (1985, 1),
        ]
        assert [(d.decade, d.count) for d in top.most_common_decades] == [
            (1990, 3),
            (2010, 2),
            (1980, 1),
        ]

    def test_top_years_limited(self):
        lists = collection(
            watched=[item(f"tt{y}", release_date=str(y)) for y in range(1980, 2000)]
        )
        top = aggregate(lists, now=NOW, top_years=10).top_stats
        assert len(top.most_common_years) == 10
        assert top.most_common_years[0].year == 1999
        assert len(top.most_common_decades) == 2

    def test_monthly_and_recent_counts(self):
        lists = collection(
            watched=[
                item("tt1", added_at=NOW),
                item("tt2", added_at=NOW - timedelta(days=3)),
                item("tt3", added_at=datetime(2024, 1, 20, tzinfo=timezone.utc)),
                item("tt4", added_at=datetime(2023, 12, 31, tzinfo=timezone.utc)),
            ]
        )
        snapshot = aggregate(lists, now=NOW)
        assert snapshot.distributions.monthly_distribution == {
            "2024-05": 2,
            "2024-01": 1,
            "2023-12": 1,
        }
        assert snapshot.overview.movies_this_month == 2
        assert snapshot.overview.movies_this_year == 3

    @pytest.mark.parametrize(
        "created, days",
        [
            (NOW - timedelta(days=30, hours=5), 30),
            (NOW - timedelta(hours=23), 0),
            (NOW + timedelta(days=2), 0),
            (None, 0),
        ],
    )
    def test_account_age(self, created, days):
        assert aggregate(collection(), created, now=NOW).overview.account_age == days

    def test_missing_categories_are_empty(self):
        snapshot = aggregate({Category.WATCHED: [item("tt1")]}, now=NOW)
        assert snapshot.overview.total_movies == 1
        assert snapshot.distributions.list_distribution["planned"] == 0

    def test_input_is_not_mutated(self):
        lists = collection(watched=[item("tt1", rating=7.0)])
        copy = {category: list(items) for category, items in lists.items()}
        aggregate(lists, now=NOW)
        assert lists == copy

    @pytest.mark.parametrize(
        "bad",
        [
            None,
            ["watched"],
            {Category.WATCHED: "tt1"},
            {Category.WATCHED: [{"imdbId": "tt1"}]},
        ],
    )
    def test_invalid_collection(self, bad):
        with pytest.raises(InvalidCollectionError):
            aggregate(bad, now=NOW)

    def test_snapshot_is_immutable(self):
        snapshot = aggregate(collection(), now=NOW)
        with pytest.raises(Exception):
            snapshot.overview = None

    def test_serialises_with_camel_case_keys(self):
        snapshot = aggregate(collection(watched=[item("tt1")]), now=NOW)
        data = snapshot.model_dump(mode="json", by_alias=True)
        assert data["overview"]["watchedCount"] == 1
        assert "ratingDistribution" in data["distributions"]
        assert "mostCommonYears" in data["topStats"]
