"""SQLAlchemy implementation of the catalog record store"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update, delete, func, and_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from database import create_db_engine, create_schema, create_session_factory, session_scope
from models.catalog_item import CatalogItem as CatalogItemModel
from models.loan_record import LoanRecord as LoanRecordModel
from domain.catalog.exceptions import ConcurrentModification, DuplicateItem, ItemNotFound
from domain.catalog.models import Availability, Item, LoanRecord
from domain.catalog.ports import RecordStorePort


logger = logging.getLogger(__name__)


class SqlAlchemyRecordStore(RecordStorePort):
    """Record store backed by the catalog_item and loan_record tables.

    Each call runs in its own transaction. Items and loan records are
    returned as domain objects detached from any session.

    Updates use optimistic locking: the UPDATE only matches the row whose
    version equals the version the caller loaded, and bumps it.
    """

    def __init__(self, session_factory: sessionmaker, engine: Optional[Engine] = None):
        """Initialize store with a session factory.

        Args:
            session_factory: SQLAlchemy sessionmaker bound to the catalog database
            engine: Engine owned by this store, disposed on close()
        """
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False, create_tables: bool = True) -> "SqlAlchemyRecordStore":
        """Open a store that owns its engine."""
        engine = create_db_engine(database_url, echo=echo)
        if create_tables:
            create_schema(engine)
        return cls(create_session_factory(engine), engine=engine)

    def save(self, item: Item) -> Item:
        if item.id is None:
            return self._insert(item)
        return self._update(item)

    def _insert(self, item: Item) -> Item:
        row = CatalogItemModel(
            title=item.title,
            author=item.author,
            category=item.category,
            medium=item.medium,
            availability=item.availability,
            version=1,
            created_at=item.created_at,
            updated_at=item.updated_at
        )
        try:
            with session_scope(self._session_factory) as session:
                session.add(row)
                session.flush()
                stored = _to_domain_item(row)
        except IntegrityError as e:
            logger.warning(f"Insert rejected for '{item.title}' by {item.author}: {e.orig}")
            raise DuplicateItem(item.title, item.author) from e

        logger.debug(f"Inserted catalog item {stored.id}")
        return stored

    def _update(self, item: Item) -> Item:
        with session_scope(self._session_factory) as session:
            stored = self._update_in_session(session, item)

        logger.debug(f"Updated catalog item {stored.id} to version {stored.version}")
        return stored

    def _update_in_session(self, session: Session, item: Item) -> Item:
        result = session.execute(
            update(CatalogItemModel)
            .where(
                and_(
                    CatalogItemModel.id == item.id,
                    CatalogItemModel.version == item.version
                )
            )
            .values(
                title=item.title,
                author=item.author,
                category=item.category,
                medium=item.medium,
                availability=item.availability,
                updated_at=item.updated_at,
                version=item.version + 1
            )
        )
        if result.rowcount == 0:
            _raise_for_missing_row(session, item)

        row = session.get(CatalogItemModel, item.id, populate_existing=True)
        return _to_domain_item(row)

    def save_with_loan(self, item: Item, loan: Optional[LoanRecord]) -> Item:
        """Update an item and write its loan record in one transaction.

        Raises:
            ConcurrentModification: If the stored version differs from item.version
        """
        with session_scope(self._session_factory) as session:
            stored = self._update_in_session(session, item)
            if loan is not None:
                self._write_loan(session, loan)

        logger.debug(f"Updated catalog item {stored.id} to version {stored.version} with loan record")
        return stored

    def find_by_id(self, item_id: int) -> Optional[Item]:
        with session_scope(self._session_factory) as session:
            row = session.get(CatalogItemModel, item_id)
            return _to_domain_item(row) if row is not None else None

    def exists_by_title_and_author(self, title: str, author: str) -> bool:
        with session_scope(self._session_factory) as session:
            query = select(CatalogItemModel.id).where(
                and_(
                    CatalogItemModel.title == title,
                    CatalogItemModel.author == author
                )
            ).limit(1)
            return session.execute(query).first() is not None

    def find_by_state(self, state: Availability) -> List[Item]:
        with session_scope(self._session_factory) as session:
            query = (
                select(CatalogItemModel)
                .where(CatalogItemModel.availability == state)
                .order_by(CatalogItemModel.id)
            )
            return [_to_domain_item(row) for row in session.execute(query).scalars().all()]

    def find_all(self) -> List[Item]:
        with session_scope(self._session_factory) as session:
            query = select(CatalogItemModel).order_by(CatalogItemModel.id)
            return [_to_domain_item(row) for row in session.execute(query).scalars().all()]

    def delete(self, item: Item) -> None:
        """Delete an AVAILABLE item at the version the caller loaded.

        Loan history goes in the same transaction.

        Raises:
            ItemNotFound: If the item does not exist
            ConcurrentModification: If the item changed or is on loan
        """
        with session_scope(self._session_factory) as session:
            result = session.execute(
                delete(CatalogItemModel).where(
                    and_(
                        CatalogItemModel.id == item.id,
                        CatalogItemModel.version == item.version,
                        CatalogItemModel.availability == Availability.AVAILABLE
                    )
                )
            )
            if result.rowcount == 0:
                _raise_for_missing_row(session, item)

            session.execute(delete(LoanRecordModel).where(LoanRecordModel.item_id == item.id))
        logger.debug(f"Deleted catalog item {item.id}")

    def count_by_state(self, state: Availability) -> int:
        with session_scope(self._session_factory) as session:
            query = select(func.count(CatalogItemModel.id)).where(CatalogItemModel.availability == state)
            return session.execute(query).scalar_one()

    def count(self) -> int:
        with session_scope(self._session_factory) as session:
            return session.execute(select(func.count(CatalogItemModel.id))).scalar_one()

    def save_loan(self, loan: LoanRecord) -> LoanRecord:
        with session_scope(self._session_factory) as session:
            return self._write_loan(session, loan)

    def _write_loan(self, session: Session, loan: LoanRecord) -> LoanRecord:
        if loan.id is None:
            row = LoanRecordModel(
                item_id=loan.item_id,
                borrower=loan.borrower,
                loaned_at=loan.loaned_at,
                due_at=loan.due_at,
                returned_at=loan.returned_at
            )
            session.add(row)
        else:
            row = session.get(LoanRecordModel, loan.id)
            if row is None:
                raise ValueError(f"Loan record {loan.id} not found")
            row.borrower = loan.borrower
            row.due_at = loan.due_at
            row.returned_at = loan.returned_at
        session.flush()
        return _to_domain_loan(row)

    def find_active_loan(self, item_id: int) -> Optional[LoanRecord]:
        with session_scope(self._session_factory) as session:
            query = (
                select(LoanRecordModel)
                .where(
                    and_(
                        LoanRecordModel.item_id == item_id,
                        LoanRecordModel.returned_at.is_(None)
                    )
                )
                .order_by(LoanRecordModel.loaned_at.desc())
                .limit(1)
            )
            row = session.execute(query).scalars().first()
            return _to_domain_loan(row) if row is not None else None

    def find_overdue_loans(self, as_of: datetime) -> List[LoanRecord]:
        with session_scope(self._session_factory) as session:
            query = (
                select(LoanRecordModel)
                .where(
                    and_(
                        LoanRecordModel.returned_at.is_(None),
                        LoanRecordModel.due_at < as_of
                    )
                )
                .order_by(LoanRecordModel.due_at)
            )
            return [_to_domain_loan(row) for row in session.execute(query).scalars().all()]

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.debug("Record store engine disposed")


def _raise_for_missing_row(session: Session, item: Item) -> None:
    if session.get(CatalogItemModel, item.id) is None:
        raise ItemNotFound(item.id)
    raise ConcurrentModification(item.id, item.version)


def _to_domain_item(row: CatalogItemModel) -> Item:
    return Item(
        id=row.id,
        title=row.title,
        author=row.author,
        category=row.category,
        medium=row.medium,
        availability=row.availability,
        created_at=row.created_at,
        updated_at=row.updated_at,
        version=row.version
    )


def _to_domain_loan(row: LoanRecordModel) -> LoanRecord:
    return LoanRecord(
        id=row.id,
        item_id=row.item_id,
        borrower=row.borrower,
        loaned_at=row.loaned_at,
        due_at=row.due_at,
        returned_at=row.returned_at
    )
