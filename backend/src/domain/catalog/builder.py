"""Fluent builder for catalog items"""

from typing import Optional, Union

from .models import Availability, Item, ItemCategory, ItemMedium


class ItemBuilder:
    """Build an Item step by step, checking required fields on build().

    Example:
        >>> item = ItemBuilder().titled("1984").by("George Orwell").fiction().physical().build()
        >>> item.availability
        <Availability.AVAILABLE: 'AVAILABLE'>
    """

    def __init__(self):
        self._title: Optional[str] = None
        self._author: Optional[str] = None
        self._category: Optional[ItemCategory] = None
        self._medium: Optional[ItemMedium] = None
        self._availability: Availability = Availability.AVAILABLE

    def titled(self, title: str) -> "ItemBuilder":
        self._title = title
        return self

    def by(self, author: str) -> "ItemBuilder":
        self._author = author
        return self

    def of_category(self, category: Union[ItemCategory, str]) -> "ItemBuilder":
        self._category = ItemCategory(category)
        return self

    def fiction(self) -> "ItemBuilder":
        return self.of_category(ItemCategory.FICTION)

    def non_fiction(self) -> "ItemBuilder":
        return self.of_category(ItemCategory.NON_FICTION)

    def in_medium(self, medium: Union[ItemMedium, str]) -> "ItemBuilder":
        self._medium = ItemMedium(medium)
        return self

    def physical(self) -> "ItemBuilder":
        return self.in_medium(ItemMedium.PHYSICAL)

    def digital(self) -> "ItemBuilder":
        return self.in_medium(ItemMedium.DIGITAL)

    def with_availability(self, availability: Union[Availability, str]) -> "ItemBuilder":
        self._availability = Availability(availability)
        return self

    def build(self) -> Item:
        """Create the item.

        Raises:
            ValueError: If title, author, category or medium is missing
        """
        if not self._title or not self._title.strip():
            raise ValueError("Title is required")
        if not self._author or not self._author.strip():
            raise ValueError("Author is required")
        if self._category is None:
            raise ValueError("Category is required")
        if self._medium is None:
            raise ValueError("Medium is required")

        return Item(
            title=self._title.strip(),
            author=self._author.strip(),
            category=self._category,
            medium=self._medium,
            availability=self._availability
        )
