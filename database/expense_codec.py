"""JSON wire format for expense records.

The category travels under the legacy key "type" so that collections saved
before categories existed still load. Every optional field has a default;
records decoded with any default applied are reported as schema version 1.
"""
import json
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from models.category import ExpenseCategory
from models.expense import ExpenseRecord, new_id
from utils.constants import DEFAULT_CURRENCY, DEFAULT_STORE
from utils.date_helpers import now

SCHEMA_VERSION = 2
LEGACY_SCHEMA_VERSION = 1

# Numeric dates are seconds since this instant (the old mobile encoder's epoch).
REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)


class RecordDecodeError(ValueError):
    pass


@dataclass(frozen=True)
class DecodeResult:
    record: ExpenseRecord
    schema_version: int
    defaulted: tuple[str, ...] = ()

    @property
    def is_defaulted(self) -> bool:
        return bool(self.defaulted)


# ── Encode ───────────────────────────────────────────────────────────────────

def encode_record(record: ExpenseRecord) -> dict:
    return {
        "id": record.id,
        "name": record.name,
        "type": record.category.value,
        "amount": record.amount,
        "currency": record.currency,
        "date": record.date.isoformat(),
        "store": record.store,
        "details": record.details,
    }


def encode_records(records) -> str:
    # allow_nan=False: a non-finite amount must never reach storage
    return json.dumps([encode_record(r) for r in records], ensure_ascii=False, allow_nan=False)


# ── Decode ───────────────────────────────────────────────────────────────────

def decode_record(data, ref_now: datetime | None = None) -> DecodeResult:
    """Decode one wire object, filling defaults for fields older data lacks.

    Raises RecordDecodeError when a required field (name, amount) is missing
    or when any present field has the wrong shape.
    """
    if not isinstance(data, dict):
        raise RecordDecodeError(f"Expected an object, got {type(data).__name__}.")

    defaulted: list[str] = []

    def optional_str(key: str, default: str) -> str:
        value = data.get(key)
        if value is None:
            defaulted.append(key)
            return default
        if not isinstance(value, str):
            raise RecordDecodeError(f"Field '{key}' must be a string.")
        return value

    name = data.get("name")
    if not isinstance(name, str):
        raise RecordDecodeError("Field 'name' is missing or not a string.")

    amount = data.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise RecordDecodeError("Field 'amount' is missing or not a number.")
    try:
        amount = float(amount)
    except OverflowError as e:
        raise RecordDecodeError("Field 'amount' is out of range.") from e
    if not math.isfinite(amount):
        raise RecordDecodeError(f"Field 'amount' must be finite, got {amount!r}.")

    record_id = optional_str("id", "") or new_id()
    type_text = optional_str("type", ExpenseCategory.OTHER.value)
    if "type" not in defaulted and not ExpenseCategory.is_known(type_text):
        defaulted.append("type")
    category = ExpenseCategory.from_legacy(type_text)

    currency = optional_str("currency", DEFAULT_CURRENCY)
    store = optional_str("store", DEFAULT_STORE)
    details = optional_str("details", "")

    raw_date = data.get("date")
    if raw_date is None:
        defaulted.append("date")
        date = ref_now or now()
    else:
        date = _decode_date(raw_date)

    record = ExpenseRecord(
        id=record_id,
        name=name,
        category=category,
        amount=amount,
        currency=currency,
        date=date,
        store=store,
        details=details,
    )
    version = LEGACY_SCHEMA_VERSION if defaulted else SCHEMA_VERSION
    return DecodeResult(record, version, tuple(defaulted))


def decode_records(text: str | bytes, ref_now: datetime | None = None) -> list[DecodeResult]:
    """Decode a whole persisted collection. Any bad element fails the lot."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise RecordDecodeError(f"Stored collection is not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise RecordDecodeError("Stored collection must be a JSON array.")

    ref_now = ref_now or now()
    results = []
    for idx, item in enumerate(payload):
        try:
            results.append(decode_record(item, ref_now))
        except RecordDecodeError as e:
            raise RecordDecodeError(f"Record {idx}: {e}") from e
    return results


def _decode_date(raw) -> datetime:
    if isinstance(raw, bool):
        raise RecordDecodeError("Field 'date' must be a string or a number.")
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw):
            raise RecordDecodeError(f"Field 'date' must be finite, got {raw!r}.")
        try:
            return _to_local_naive(REFERENCE_DATE + timedelta(seconds=raw))
        except (OverflowError, OSError, ValueError) as e:
            raise RecordDecodeError(f"Field 'date' is out of range: {raw!r}.") from e
    if isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise RecordDecodeError(f"Field 'date' is not ISO-8601: {raw!r}.") from e
        if parsed.tzinfo is None:
            return parsed
        try:
            return _to_local_naive(parsed)
        except (OverflowError, OSError, ValueError) as e:
            raise RecordDecodeError(f"Field 'date' is out of range: {raw!r}.") from e
    raise RecordDecodeError("Field 'date' must be a string or a number.")


def _to_local_naive(dt: datetime) -> datetime:
    return dt.astimezone().replace(tzinfo=None)
