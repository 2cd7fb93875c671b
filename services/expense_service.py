import logging
from datetime import datetime
from typing import Iterable

from database.expense_dao import ExpenseDAO
from models.category import ExpenseCategory
from models.expense import ExpenseRecord
from utils.constants import DEFAULT_CURRENCY, UNSET_STORE
from utils.currency import parse_amount
from utils.date_helpers import now

logger = logging.getLogger(__name__)


class ExpenseService:
    """Owns the session's record collection and mirrors it to storage."""

    def __init__(self, expense_dao: ExpenseDAO):
        self._dao = expense_dao
        self._records: list[ExpenseRecord] = []

    def load_or_empty(self) -> list[ExpenseRecord]:
        self._records = list(self._dao.load_all())
        return list(self._records)

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        """Insertion order snapshot."""
        return tuple(self._records)

    def sorted_records(self) -> list[ExpenseRecord]:
        """Newest first; equal dates keep insertion order."""
        return sorted(self._records, key=lambda r: r.date, reverse=True)

    def add_record(self, record: ExpenseRecord) -> ExpenseRecord:
        self._records.append(record)
        logger.info("Added expense %s (%s %.2f)", record.id, record.currency, record.amount)
        self._persist()
        return record

    def create_expense(
        self,
        name: str,
        category: ExpenseCategory,
        amount_text: str,
        currency: str = DEFAULT_CURRENCY,
        date: datetime | None = None,
        store: str = "",
        details: str = "",
    ) -> ExpenseRecord:
        """Add-entry flow. Raises InvalidAmountError and saves nothing on bad amount text."""
        amount = parse_amount(amount_text)
        record = ExpenseRecord(
            name=name,
            category=category,
            amount=amount,
            currency=currency,
            date=date or now(),
            store=store.strip() or UNSET_STORE,
            details=details,
        )
        return self.add_record(record)

    def delete_records(self, indices: Iterable[int]) -> list[ExpenseRecord]:
        """Remove records at positions of `records`; the rest keep their order."""
        positions = set(indices)
        size = len(self._records)
        bad = [i for i in positions if not -size <= i < size]
        if bad:
            raise IndexError(f"Record index out of range: {sorted(bad)}")
        positions = {i % size for i in positions} if size else set()
        removed = [r for i, r in enumerate(self._records) if i in positions]
        if not removed:
            return []
        self._records = [r for i, r in enumerate(self._records) if i not in positions]
        logger.info("Deleted %d expense(s)", len(removed))
        self._persist()
        return removed

    def delete_by_ids(self, record_ids: Iterable[str]) -> list[ExpenseRecord]:
        wanted = set(record_ids)
        return self.delete_records(
            i for i, r in enumerate(self._records) if r.id in wanted
        )

    def _persist(self):
        self._dao.save_all(self._records)
