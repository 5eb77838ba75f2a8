"""CatalogItem SQLAlchemy model"""

from sqlalchemy import Column, Integer, Text, Enum as SQLEnum, Index
from sqlalchemy.orm import relationship

from .base import Base, UTCDateTime, utcnow
from domain.catalog.models import Availability, ItemCategory, ItemMedium


class CatalogItem(Base):
    """Catalog item row.

    Table schema:
    - id: integer primary key assigned on insert
    - title, author: descriptive text (unique together)
    - category: FICTION/NON_FICTION (ENUM)
    - medium: PHYSICAL/DIGITAL (ENUM)
    - availability: AVAILABLE/LOANED (ENUM)
    - version: optimistic locking counter, bumped on every update
    - created_at, updated_at: standard timestamps
    """
    __tablename__ = "catalog_item"
    __table_args__ = (
        Index("ix_catalog_item_title_author", "title", "author", unique=True),
        Index("ix_catalog_item_availability", "availability"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    category = Column(SQLEnum(ItemCategory, name="item_category"), nullable=False)
    medium = Column(SQLEnum(ItemMedium, name="item_medium"), nullable=False)
    availability = Column(
        SQLEnum(Availability, name="item_availability"),
        nullable=False,
        default=Availability.AVAILABLE
    )
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=True)

    # Relationships
    loans = relationship("LoanRecord", back_populates="item", cascade="all, delete-orphan")
