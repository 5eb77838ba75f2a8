"""Search strategies over catalog items"""

import re
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from domain.catalog.models import Item, ItemCategory


class SearchStrategy(ABC):
    """Filter a list of items by a free-text criterion.

    A blank criterion matches nothing.
    """

    name: str = "search"

    @abstractmethod
    def search(self, items: Iterable[Item], criterion: Optional[str]) -> List[Item]:
        pass


class SearchByTitle(SearchStrategy):
    """Case-insensitive substring match on the title"""

    name = "title"

    def search(self, items: Iterable[Item], criterion: Optional[str]) -> List[Item]:
        needle = _normalise(criterion)
        if not needle:
            return []
        return [item for item in items if item.title and needle in item.title.casefold()]


class SearchByAuthor(SearchStrategy):
    """Case-insensitive substring match on the author"""

    name = "author"

    def search(self, items: Iterable[Item], criterion: Optional[str]) -> List[Item]:
        needle = _normalise(criterion)
        if not needle:
            return []
        return [item for item in items if item.author and needle in item.author.casefold()]


class SearchByCategory(SearchStrategy):
    """Exact category match from a loosely written category name.

    Accepts "fiction", "non-fiction", "non fiction", "nonfiction",
    "non_fiction" in any case. Unknown names match nothing.
    """

    name = "category"

    def search(self, items: Iterable[Item], criterion: Optional[str]) -> List[Item]:
        category = parse_category(criterion)
        if category is None:
            return []
        return [item for item in items if item.category == category]


def parse_category(criterion: Optional[str]) -> Optional[ItemCategory]:
    """Map free text to an ItemCategory.

    Example:
        >>> parse_category("Non-Fiction")
        <ItemCategory.NON_FICTION: 'NON_FICTION'>
        >>> parse_category("poetry") is None
        True
    """
    text = re.sub(r"[\s_\-]+", "", _normalise(criterion))
    if text == "nonfiction":
        return ItemCategory.NON_FICTION
    if text == "fiction":
        return ItemCategory.FICTION
    return None


STRATEGIES = {
    SearchByTitle.name: SearchByTitle,
    SearchByAuthor.name: SearchByAuthor,
    SearchByCategory.name: SearchByCategory,
}


def get_strategy(name: str) -> SearchStrategy:
    """Get a strategy instance by name ("title", "author", "category").

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return STRATEGIES[name.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown search strategy '{name}'. Available: {sorted(STRATEGIES)}"
        ) from None


def _normalise(criterion: Optional[str]) -> str:
    return (criterion or "").strip().casefold()
