from datetime import datetime

import pytest

from database.db_manager import DatabaseManager
from database.expense_dao import ExpenseDAO
from models.category import ExpenseCategory
from models.expense import ExpenseRecord
from services.expense_service import ExpenseService

# Wednesday; its ISO week starts Monday 2026-03-16.
NOW = datetime(2026, 3, 18, 15, 30)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "test.db"))
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def dao(db) -> ExpenseDAO:
    return ExpenseDAO(db)


@pytest.fixture
def service(dao) -> ExpenseService:
    svc = ExpenseService(dao)
    svc.load_or_empty()
    return svc


def make_record(
    amount: float = 10.0,
    date: datetime = NOW,
    store: str = "Amazon",
    category: ExpenseCategory = ExpenseCategory.FOOD,
    currency: str = "USD",
    name: str = "Item",
) -> ExpenseRecord:
    return ExpenseRecord(
        name=name,
        category=category,
        amount=amount,
        currency=currency,
        date=date,
        store=store,
    )
