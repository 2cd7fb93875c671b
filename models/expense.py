import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from models.category import ExpenseCategory
from utils.constants import DEFAULT_CURRENCY, DEFAULT_STORE, STORE_OPTIONS
from utils.date_helpers import now


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ExpenseRecord:
    name: str
    category: ExpenseCategory
    amount: float
    currency: str = DEFAULT_CURRENCY
    date: datetime = field(default_factory=now)
    store: str = DEFAULT_STORE
    details: str = ""
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        if not math.isfinite(self.amount):
            raise ValueError(f"Amount must be finite, got {self.amount!r}.")
        if not isinstance(self.category, ExpenseCategory):
            raise ValueError(f"Invalid category: {self.category!r}")


def filter_stores(query: str | None) -> list[str]:
    """Case-insensitive substring search over the store picker options."""
    q = (query or "").strip().casefold()
    if not q:
        return list(STORE_OPTIONS)
    return [s for s in STORE_OPTIONS if q in s.casefold()]
