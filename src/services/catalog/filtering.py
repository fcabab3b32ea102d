"""Multi-criteria content filtering.

Precedence:
1. A title matching exactly one entity is returned on its own.
2. Genre names select entities in any of them (OR).
3. A year range narrows genre results in memory, or is fetched
   directly from the store when no genre was given.
4. Results are sorted by popularity. The order names are inverted:
   "asc" yields the most popular first and "desc" the least popular
   first. Clients depend on this.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from src.services.catalog.schemas import FilterParams, PopularityOrder
from src.utils.logger import get_logger

logger = get_logger("catalog.filtering")

EntityT = TypeVar("EntityT")


class FilterableStore(Protocol[EntityT]):
    """Store queries the filter engine relies on."""

    def get_by_title(self, title: str) -> list[EntityT]: ...

    def get_by_genres(self, names: Sequence[str]) -> list[EntityT]: ...

    def get_by_year(self, year_start: int, year_end: int) -> list[EntityT]: ...


@dataclass
class FilteredContent:
    """Filter results across both content types.

    Attributes:
        movies: Matching movies.
        series: Matching series.
    """

    movies: list[Any] = field(default_factory=list)
    series: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.movies) + len(self.series)


# =============================================================================
# PURE HELPERS
# =============================================================================


def deduplicate_by_id(items: Iterable[EntityT]) -> list[EntityT]:
    """Drop repeated entities, keeping the first occurrence of each id."""
    seen: set[int] = set()
    unique = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def narrow_by_year(items: Iterable[EntityT], year_start: int, year_end: int) -> list[EntityT]:
    """Keep entities released within [year_start, year_end]."""
    return [item for item in items if year_start <= item.release_year <= year_end]


def sort_by_popularity(items: list[EntityT], order: PopularityOrder | None) -> list[EntityT]:
    """Stable sort on popularity with the inverted order names.

    Args:
        items: Entities to sort.
        order: "asc" for most popular first, "desc" for least popular
            first, None to keep the input order.

    Returns:
        New sorted list.
    """
    if order == "asc":
        return sorted(items, key=lambda item: item.popularity, reverse=True)
    if order == "desc":
        return sorted(items, key=lambda item: item.popularity)
    return list(items)


# =============================================================================
# ENGINE
# =============================================================================


def get_filtered(store: FilterableStore[EntityT], params: FilterParams) -> list[EntityT]:
    """Apply a filter to one content type.

    Without title, genres or year range the result is empty.
    Unknown genre names give an empty result, not an error.

    Args:
        store: Store for the content type, bound to an open session.
        params: Filter parameters.

    Returns:
        Matching entities, deduplicated and ordered.
    """
    if params.title:
        matches = store.get_by_title(params.title)
        if len(matches) == 1:
            logger.debug(f"Title '{params.title}' matched a single entity")
            return matches
        logger.debug(f"Title '{params.title}' matched {len(matches)} entities, not short-circuiting")

    results: list[EntityT] = []
    genre_filter = bool(params.genres)
    if genre_filter:
        results = deduplicate_by_id(store.get_by_genres(params.genres))

    if params.has_year_range:
        if genre_filter:
            results = narrow_by_year(results, params.year_start, params.year_end)
        else:
            results = deduplicate_by_id(store.get_by_year(params.year_start, params.year_end))

    return sort_by_popularity(results, params.popularity_order)
