"""Mapping of records exported by the legacy lending system.

Legacy records carry free-text category and format labels (mostly in
Spanish). Unknown or missing labels fall back to FICTION and PHYSICAL.
"""

from dataclasses import dataclass
from typing import Optional

from .models import Availability, Item, ItemCategory, ItemMedium


LEGACY_CATEGORIES = {
    "ficcion": ItemCategory.FICTION,
    "novela": ItemCategory.FICTION,
    "cuento": ItemCategory.FICTION,
    "fantasia": ItemCategory.FICTION,
    "ciencia ficcion": ItemCategory.FICTION,
    "no ficcion": ItemCategory.NON_FICTION,
    "ensayo": ItemCategory.NON_FICTION,
    "biografia": ItemCategory.NON_FICTION,
    "historia": ItemCategory.NON_FICTION,
    "ciencia": ItemCategory.NON_FICTION,
    "tecnico": ItemCategory.NON_FICTION,
}

LEGACY_MEDIA = {
    "digital": ItemMedium.DIGITAL,
    "ebook": ItemMedium.DIGITAL,
    "pdf": ItemMedium.DIGITAL,
    "epub": ItemMedium.DIGITAL,
    "electronico": ItemMedium.DIGITAL,
    "fisico": ItemMedium.PHYSICAL,
    "papel": ItemMedium.PHYSICAL,
    "impreso": ItemMedium.PHYSICAL,
    "tapa dura": ItemMedium.PHYSICAL,
    "tapa blanda": ItemMedium.PHYSICAL,
}

DEFAULT_LEGACY_CATEGORY = ItemCategory.FICTION
DEFAULT_LEGACY_MEDIUM = ItemMedium.PHYSICAL


@dataclass
class LegacyRecord:
    """One book as exported by the legacy system."""
    name: Optional[str]
    writer: Optional[str]
    category: Optional[str] = None
    format: Optional[str] = None
    loaned: bool = False


def legacy_category(label: Optional[str]) -> ItemCategory:
    """Map a legacy category label to an ItemCategory.

    Example:
        >>> legacy_category("Ensayo")
        <ItemCategory.NON_FICTION: 'NON_FICTION'>
        >>> legacy_category("poesia")
        <ItemCategory.FICTION: 'FICTION'>
    """
    return LEGACY_CATEGORIES.get(_normalise_label(label), DEFAULT_LEGACY_CATEGORY)


def legacy_medium(label: Optional[str]) -> ItemMedium:
    return LEGACY_MEDIA.get(_normalise_label(label), DEFAULT_LEGACY_MEDIUM)


def from_legacy(record: LegacyRecord) -> Item:
    """Build a candidate Item from a legacy record.

    The result has no id and still has to go through CatalogService.admit(),
    which validates it and admits it as AVAILABLE.
    """
    return Item(
        title=record.name,
        author=record.writer,
        category=legacy_category(record.category),
        medium=legacy_medium(record.format),
        availability=Availability.LOANED if record.loaned else Availability.AVAILABLE
    )


def _normalise_label(label: Optional[str]) -> str:
    return " ".join((label or "").split()).lower()
