"""Tests for the content filter engine."""

from types import SimpleNamespace

import pytest

from src.services.catalog.filtering import (
    FilteredContent,
    deduplicate_by_id,
    get_filtered,
    narrow_by_year,
    sort_by_popularity,
)
from src.services.catalog.schemas import FilterParams


def item(item_id: int, year: int = 2020, popularity: int = 0, title: str = "") -> SimpleNamespace:
    return SimpleNamespace(id=item_id, release_year=year, popularity=popularity, title=title)


class FakeStore:
    """In-memory store recording which fetches the engine made."""

    def __init__(self, items: list[SimpleNamespace], genres: dict[str, list[int]]) -> None:
        self.items = {i.id: i for i in items}
        self.genres = genres
        self.calls: list[str] = []

    def get_by_title(self, title: str) -> list[SimpleNamespace]:
        self.calls.append("title")
        return [i for i in self.items.values() if title.lower() in i.title.lower()]

    def get_by_genres(self, names) -> list[SimpleNamespace]:
        self.calls.append("genres")
        return [self.items[i] for name in names for i in self.genres.get(name, [])]

    def get_by_year(self, year_start: int, year_end: int) -> list[SimpleNamespace]:
        self.calls.append("year")
        return [i for i in self.items.values() if year_start <= i.release_year <= year_end]


@pytest.fixture
def store() -> FakeStore:
    items = [
        item(1, 2019, 3, "Alien"),
        item(2, 2021, 9, "Aliens"),
        item(3, 2022, 1, "Heat"),
        item(4, 2023, 5, "Up"),
    ]
    return FakeStore(items, {"Horror": [1, 2, 3], "Thriller": [2, 3], "Family": [4]})


# =============================================================================
# PURE HELPERS
# =============================================================================


class TestDeduplicateById:
    """Tests for deduplicate_by_id."""

    @staticmethod
    def test_keeps_first_occurrence_order() -> None:
        a, b = item(1), item(2)
        assert deduplicate_by_id([a, b, a, b, a]) == [a, b]

    @staticmethod
    def test_empty() -> None:
        assert deduplicate_by_id([]) == []


class TestNarrowByYear:
    """Tests for narrow_by_year."""

    @staticmethod
    def test_bounds_are_inclusive() -> None:
        items = [item(1, 2019), item(2, 2020), item(3, 2023), item(4, 2024)]
        assert [i.id for i in narrow_by_year(items, 2020, 2023)] == [2, 3]


class TestSortByPopularity:
    """Tests for the inverted popularity order names."""

    @staticmethod
    def test_asc_puts_most_popular_first() -> None:
        items = [item(1, popularity=2), item(2, popularity=7), item(3, popularity=4)]
        assert [i.id for i in sort_by_popularity(items, "asc")] == [2, 3, 1]

    @staticmethod
    def test_desc_puts_least_popular_first() -> None:
        items = [item(1, popularity=2), item(2, popularity=7), item(3, popularity=4)]
        assert [i.id for i in sort_by_popularity(items, "desc")] == [1, 3, 2]

    @staticmethod
    def test_ties_keep_input_order() -> None:
        items = [item(1, popularity=1), item(2, popularity=1), item(3, popularity=1)]
        assert [i.id for i in sort_by_popularity(items, "asc")] == [1, 2, 3]
        assert [i.id for i in sort_by_popularity(items, "desc")] == [1, 2, 3]

    @staticmethod
    def test_none_keeps_order_in_a_copy() -> None:
        items = [item(2), item(1)]
        result = sort_by_popularity(items, None)
        assert result == items
        assert result is not items


class TestFilteredContent:
    """Tests for the two-list result container."""

    @staticmethod
    def test_len_counts_both_lists() -> None:
        assert len(FilteredContent(movies=[item(1)], series=[item(2), item(3)])) == 3
        assert len(FilteredContent()) == 0


# =============================================================================
# ENGINE
# =============================================================================


class TestGetFiltered:
    """Tests for criteria precedence in get_filtered."""

    @staticmethod
    def test_single_title_match_short_circuits(store: FakeStore) -> None:
        params = FilterParams(title="heat", genres=["Family"], year_start=2023, year_end=2023)
        result = get_filtered(store, params)
        assert [i.id for i in result] == [3]
        assert store.calls == ["title"]

    @staticmethod
    def test_several_title_matches_fall_through(store: FakeStore) -> None:
        params = FilterParams(title="alien", genres=["Family"])
        result = get_filtered(store, params)
        assert [i.id for i in result] == [4]
        assert store.calls == ["title", "genres"]

    @staticmethod
    def test_title_without_match_falls_through(store: FakeStore) -> None:
        params = FilterParams(title="nothing", year_start=2022, year_end=2023)
        assert [i.id for i in get_filtered(store, params)] == [3, 4]

    @staticmethod
    def test_genres_use_or_semantics_without_duplicates(store: FakeStore) -> None:
        params = FilterParams(genres=["Horror", "Thriller"])
        assert [i.id for i in get_filtered(store, params)] == [1, 2, 3]

    @staticmethod
    def test_year_range_narrows_genre_results_in_memory(store: FakeStore) -> None:
        params = FilterParams(genres=["Horror"], year_start=2020, year_end=2022)
        assert [i.id for i in get_filtered(store, params)] == [2, 3]
        assert "year" not in store.calls

    @staticmethod
    def test_year_range_alone_fetches_by_year(store: FakeStore) -> None:
        params = FilterParams(year_start=2021, year_end=2023)
        assert [i.id for i in get_filtered(store, params)] == [2, 3, 4]
        assert store.calls == ["year"]

    @staticmethod
    def test_unknown_genre_gives_empty_result(store: FakeStore) -> None:
        params = FilterParams(genres=["Western"], year_start=2000, year_end=2030)
        assert get_filtered(store, params) == []

    @staticmethod
    def test_no_criteria_gives_empty_result(store: FakeStore) -> None:
        assert get_filtered(store, FilterParams()) == []
        assert store.calls == []

    @staticmethod
    def test_order_applies_after_filtering(store: FakeStore) -> None:
        params = FilterParams(genres=["Horror"], popularity_order="asc")
        assert [i.id for i in get_filtered(store, params)] == [2, 1, 3]


class TestGetFilteredOnDatabase:
    """Filter engine against real movie storage."""

    @staticmethod
    def test_horror_between_2020_and_2023(movie_service, horror_catalog) -> None:
        params = FilterParams(genres=["Horror"], year_start=2020, year_end=2023)
        titles = [m.title for m in movie_service.get_filtered(params)]
        assert titles == ["Malignant", "X", "Barbarian", "Smile"]

    @staticmethod
    def test_movie_in_two_requested_genres_appears_once(movie_service, horror_catalog) -> None:
        params = FilterParams(genres=["Horror", "Thriller"])
        titles = [m.title for m in movie_service.get_filtered(params)]
        assert titles.count("X") == 1
        assert titles.count("Barbarian") == 1
        assert len(titles) == 5

    @staticmethod
    def test_popularity_order_uses_favorites(movie_service, horror_catalog, users) -> None:
        u1, u2 = users
        movie_service.add_to_favorites(horror_catalog["Smile"], u1)
        movie_service.add_to_favorites(horror_catalog["Smile"], u2)
        movie_service.add_to_favorites(horror_catalog["X"], u1)

        params = FilterParams(genres=["Horror"], year_start=2020, year_end=2023)
        most_first = movie_service.get_filtered(params.model_copy(update={"popularity_order": "asc"}))
        least_first = movie_service.get_filtered(params.model_copy(update={"popularity_order": "desc"}))

        assert [m.title for m in most_first] == ["Smile", "X", "Malignant", "Barbarian"]
        assert [m.title for m in least_first] == ["Malignant", "Barbarian", "X", "Smile"]

    @staticmethod
    def test_title_is_case_insensitive_substring(movie_service, horror_catalog) -> None:
        result = movie_service.get_filtered(FilterParams(title="KNIVES"))
        assert [m.title for m in result] == ["Knives Out"]
