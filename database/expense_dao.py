import logging
import sqlite3
from collections import Counter

from database.db_manager import DatabaseManager
from database.expense_codec import RecordDecodeError, decode_records, encode_records
from models.expense import ExpenseRecord
from utils.constants import ITEMS_KEY

logger = logging.getLogger(__name__)


class ExpenseDAO:
    """Stores the whole record collection as one JSON value under ITEMS_KEY."""

    def __init__(self, db: DatabaseManager, key: str = ITEMS_KEY):
        self._db = db
        self._key = key

    def load_all(self) -> list[ExpenseRecord]:
        """Missing or undecodable data means 'no data yet': returns []."""
        raw = self._db.get_setting(self._key, None)
        if raw is None:
            return []
        try:
            results = decode_records(raw)
        except RecordDecodeError as e:
            logger.warning("Discarding unreadable %r collection: %s", self._key, e)
            return []

        versions = Counter(r.schema_version for r in results)
        logger.info("Loaded %d expense(s), schema versions %s", len(results), dict(versions))
        for r in results:
            if r.is_defaulted:
                logger.debug("Record %s filled defaults for %s", r.record.id, ", ".join(r.defaulted))
        return [r.record for r in results]

    def save_all(self, records: list[ExpenseRecord]) -> bool:
        """Full overwrite. Failures are logged, never raised; returns success."""
        try:
            payload = encode_records(records)
            self._db.set_setting(self._key, payload)
        except (ValueError, TypeError, sqlite3.Error):
            logger.exception("Could not persist %d expense(s)", len(records))
            return False
        return True
