"""Unit tests for SqlAlchemyRecordStore"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import inspect, select

from database import session_scope
from domain.catalog import (
    Availability,
    ConcurrentModification,
    DuplicateItem,
    InvalidOperation,
    Item,
    ItemNotFound,
    LoanRecord,
)
from infrastructure.repositories.catalog_repository import SqlAlchemyRecordStore
from models import LoanRecord as LoanRecordModel


NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestSchema:

    def test_tables_created(self, record_store):
        tables = inspect(record_store._engine).get_table_names()
        assert "catalog_item" in tables
        assert "loan_record" in tables


class TestItemPersistence:
    """Test insert, update, lookup and delete of items"""

    def test_insert_assigns_id_and_version(self, record_store, make_item):
        stored = record_store.save(make_item())

        assert stored.id is not None
        assert stored.version == 1
        assert record_store.count() == 1

    def test_find_by_id_round_trip(self, record_store, make_item):
        candidate = make_item()
        stored = record_store.save(candidate)

        found = record_store.find_by_id(stored.id)

        assert found.title == "Brave New World"
        assert found.category == candidate.category
        assert found.created_at == candidate.created_at
        assert found.created_at.tzinfo is not None

    def test_find_missing(self, record_store):
        assert record_store.find_by_id(123) is None

    def test_duplicate_insert_rejected(self, record_store, make_item):
        record_store.save(make_item())

        with pytest.raises(DuplicateItem):
            record_store.save(make_item())

        assert record_store.count() == 1

    def test_exists_by_title_and_author(self, record_store, make_item):
        record_store.save(make_item())
        assert record_store.exists_by_title_and_author("Brave New World", "Aldous Huxley") is True
        assert record_store.exists_by_title_and_author("Brave New World", "George Orwell") is False

    def test_update_bumps_version(self, record_store, make_item):
        stored = record_store.save(make_item())
        stored.update(title="Island")

        updated = record_store.save(stored)

        assert updated.version == 2
        assert record_store.find_by_id(stored.id).title == "Island"

    def test_stale_update_rejected(self, record_store, make_item):
        stored = record_store.save(make_item())
        first = record_store.find_by_id(stored.id)
        second = record_store.find_by_id(stored.id)

        first.availability = Availability.LOANED
        record_store.save(first)

        second.availability = Availability.LOANED
        with pytest.raises(ConcurrentModification) as exc:
            record_store.save(second)

        assert isinstance(exc.value, InvalidOperation)
        assert record_store.find_by_id(stored.id).version == 2

    def test_update_missing_item(self, record_store, make_item):
        with pytest.raises(ItemNotFound):
            record_store.save(make_item(id=999, version=1))

    def test_find_by_state_and_counts(self, record_store, make_item):
        first = record_store.save(make_item())
        record_store.save(make_item(title="Island"))
        first.availability = Availability.LOANED
        record_store.save(first)

        assert [i.id for i in record_store.find_by_state(Availability.LOANED)] == [first.id]
        assert record_store.count_by_state(Availability.AVAILABLE) == 1
        assert record_store.count_by_state(Availability.LOANED) == 1
        assert [i.title for i in record_store.find_all()] == ["Brave New World", "Island"]

    def test_delete(self, record_store, make_item):
        stored = record_store.save(make_item())
        record_store.delete(stored)
        assert record_store.find_by_id(stored.id) is None

    def test_delete_stale_version_rejected(self, record_store, make_item):
        stored = record_store.save(make_item())
        stale = record_store.find_by_id(stored.id)
        stored.update(title="Island")
        record_store.save(stored)

        with pytest.raises(ConcurrentModification):
            record_store.delete(stale)

        assert record_store.count() == 1

    def test_delete_loaned_item_rejected(self, record_store, make_item):
        stored = record_store.save(make_item())
        stored.availability = Availability.LOANED
        loaned = record_store.save(stored)

        with pytest.raises(ConcurrentModification):
            record_store.delete(loaned)

        assert record_store.find_by_id(stored.id).availability == Availability.LOANED

    def test_delete_missing(self, record_store):
        with pytest.raises(ItemNotFound):
            record_store.delete(Item(title="Ghost", author="Nobody Here", id=77))


class TestLoanPersistence:
    """Test loan record storage"""

    @pytest.fixture
    def item(self, record_store, make_item):
        return record_store.save(make_item())

    def test_save_and_find_active_loan(self, record_store, item):
        saved = record_store.save_loan(LoanRecord.open(item.id, loan_days=7, borrower="Ada", now=NOW))

        active = record_store.find_active_loan(item.id)

        assert saved.id is not None
        assert active.id == saved.id
        assert active.borrower == "Ada"
        assert active.due_at == NOW + timedelta(days=7)

    def test_closed_loan_not_active(self, record_store, item):
        loan = record_store.save_loan(LoanRecord.open(item.id, loan_days=7, now=NOW))
        loan.close(NOW + timedelta(days=1))

        record_store.save_loan(loan)

        assert record_store.find_active_loan(item.id) is None

    def test_find_overdue_loans(self, record_store, item, make_item):
        other = record_store.save(make_item(title="Island"))
        record_store.save_loan(LoanRecord.open(item.id, loan_days=3, now=NOW))
        record_store.save_loan(LoanRecord.open(other.id, loan_days=10, now=NOW))

        overdue = record_store.find_overdue_loans(NOW + timedelta(days=5))

        assert [loan.item_id for loan in overdue] == [item.id]

    def test_save_with_loan_writes_both(self, record_store, item):
        item.availability = Availability.LOANED
        loan = LoanRecord.open(item.id, loan_days=7, borrower="Ada", now=NOW)

        stored = record_store.save_with_loan(item, loan)

        assert stored.availability == Availability.LOANED
        assert stored.version == 2
        assert record_store.find_active_loan(item.id).borrower == "Ada"

    def test_save_with_loan_stale_item_writes_nothing(self, record_store, item):
        fresh = record_store.find_by_id(item.id)
        fresh.update(title="Island")
        record_store.save(fresh)

        item.availability = Availability.LOANED
        with pytest.raises(ConcurrentModification):
            record_store.save_with_loan(item, LoanRecord.open(item.id, loan_days=7, now=NOW))

        assert record_store.find_active_loan(item.id) is None
        assert record_store.find_by_id(item.id).availability == Availability.AVAILABLE

    def test_save_with_loan_rolls_back_item_when_loan_write_fails(self, record_store, item, monkeypatch):
        def broken_write(session, loan):
            raise RuntimeError("disk full")

        monkeypatch.setattr(record_store, "_write_loan", broken_write)
        item.availability = Availability.LOANED

        with pytest.raises(RuntimeError):
            record_store.save_with_loan(item, LoanRecord.open(item.id, loan_days=7, now=NOW))

        stored = record_store.find_by_id(item.id)
        assert stored.availability == Availability.AVAILABLE
        assert stored.version == 1

    def test_unknown_loan_update(self, record_store, item):
        loan = LoanRecord.open(item.id, loan_days=3, now=NOW)
        loan.id = 404
        with pytest.raises(ValueError):
            record_store.save_loan(loan)

    def test_delete_item_removes_loan_history(self, record_store, item):
        loan = record_store.save_loan(LoanRecord.open(item.id, loan_days=3, now=NOW))
        loan.close(NOW + timedelta(days=1))
        record_store.save_loan(loan)

        record_store.delete(item)

        with session_scope(record_store._session_factory) as session:
            assert session.execute(select(LoanRecordModel)).scalars().all() == []


class TestLifetime:

    def test_close_disposes_engine(self):
        store = SqlAlchemyRecordStore.from_url("sqlite://")
        store.close()
        # Closing twice is harmless
        store.close()

    def test_file_database_persists_between_stores(self, tmp_path, make_item):
        url = f"sqlite:///{tmp_path / 'catalog.db'}"

        first = SqlAlchemyRecordStore.from_url(url)
        stored = first.save(make_item())
        first.close()

        second = SqlAlchemyRecordStore.from_url(url)
        try:
            assert second.find_by_id(stored.id).title == "Brave New World"
        finally:
            second.close()
