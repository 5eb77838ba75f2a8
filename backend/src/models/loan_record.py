"""LoanRecord SQLAlchemy model"""

from sqlalchemy import Column, Integer, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base, UTCDateTime


class LoanRecord(Base):
    """One lending of a catalog item.

    A row is open while returned_at is NULL. Rows are removed together
    with their item.
    """
    __tablename__ = "loan_record"
    __table_args__ = (
        Index("ix_loan_record_item_id", "item_id"),
        Index("ix_loan_record_due_at", "due_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(Integer, ForeignKey("catalog_item.id", ondelete="CASCADE"), nullable=False)
    borrower = Column(Text, nullable=True)
    loaned_at = Column(UTCDateTime, nullable=False)
    due_at = Column(UTCDateTime, nullable=False)
    returned_at = Column(UTCDateTime, nullable=True)

    # Relationships
    item = relationship("CatalogItem", back_populates="loans")
