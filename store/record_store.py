"""Keyed collection persistence.

Every key holds one JSON document: ``settings`` is a single object,
``products``/``customers``/``invoices`` are arrays of records with an
integer ``id``, ``seeded`` is a boolean. Backends only know how to read
and flush raw JSON text; the collection operations and the transaction
staging live in :class:`RecordStore`.

Only one session is expected to write at a time. ``transaction()`` makes
a group of writes all-or-nothing, it does not serialize concurrent
writers.
"""
import json
from contextlib import contextmanager
from decimal import Decimal
from datetime import datetime, date

from src.exceptions import ConsistencyError
from src.logger import get_logger

logger = get_logger("RecordStore")

SETTINGS = "settings"
PRODUCTS = "products"
CUSTOMERS = "customers"
INVOICES = "invoices"
SEEDED = "seeded"


def serialize_for_json(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class RecordStore:
    def __init__(self):
        self._staged = None

    # -------------------- backend hooks --------------------
    def _load(self, key):
        raise NotImplementedError

    def _flush(self, changes):
        """Persist ``{key: json_text}`` as one unit."""
        raise NotImplementedError

    # -------------------- raw access --------------------
    def _read(self, key):
        if self._staged is not None and key in self._staged:
            return self._staged[key]
        return self._load(key)

    def _write(self, key, value):
        text = json.dumps(value, default=serialize_for_json)
        if self._staged is not None:
            self._staged[key] = text
        else:
            self._flush({key: text})

    @property
    def in_transaction(self):
        return self._staged is not None

    @contextmanager
    def transaction(self):
        """Stage every write made inside the block and apply them together.

        Nested calls join the outermost transaction.
        """
        if self._staged is not None:
            yield self
            return

        self._staged = {}
        try:
            yield self
            changes = self._staged
            self._staged = None
            if changes:
                try:
                    self._flush(changes)
                except ConsistencyError:
                    raise
                except Exception as e:
                    logger.error("Flush of %s failed: %s", sorted(changes), str(e))
                    raise ConsistencyError(f"Could not apply changes to {', '.join(sorted(changes))}") from e
        except Exception:
            if self._staged:
                logger.warning("Discarding staged changes to %s", sorted(self._staged))
            raise
        finally:
            self._staged = None

    # -------------------- document operations --------------------
    def get(self, key, default=None):
        text = self._read(key)
        if text is None:
            return default
        try:
            value = json.loads(text)
        except ValueError:
            logger.warning("Unreadable JSON under '%s', treating as empty", key)
            return default
        return default if value is None else value

    def set(self, key, value):
        self._write(key, value)
        return value

    # -------------------- collection operations --------------------
    def get_all(self, key):
        value = self.get(key, [])
        return value if isinstance(value, list) else []

    def find(self, key, record_id):
        for record in self.get_all(key):
            if record.get("id") == record_id:
                return record
        return None

    def append(self, key, record):
        records = self.get_all(key)
        records.append(record)
        self._write(key, records)
        return record

    def update(self, key, record_id, updates):
        records = self.get_all(key)
        for idx, record in enumerate(records):
            if record.get("id") == record_id:
                records[idx] = {**record, **updates}
                self._write(key, records)
                return records[idx]
        return None

    def remove(self, key, record_id):
        records = self.get_all(key)
        kept = [r for r in records if r.get("id") != record_id]
        if len(kept) == len(records):
            return False
        self._write(key, kept)
        return True

    def next_id(self, key):
        ids = [r.get("id") or 0 for r in self.get_all(key)]
        return max(ids) + 1 if ids else 1


class InMemoryRecordStore(RecordStore):
    """Dict of JSON strings; what a browser key-value store would hold."""

    def __init__(self, initial=None):
        super().__init__()
        self._data = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value, default=serialize_for_json)

    def _load(self, key):
        return self._data.get(key)

    def _flush(self, changes):
        self._data.update(changes)


class SqlRecordStore(RecordStore):
    """Records table through a SQLAlchemy session; one commit per flush."""

    def __init__(self, session):
        super().__init__()
        self.session = session

    def _load(self, key):
        from store.record import Record
        record = self.session.get(Record, key)
        return record.value if record else None

    def _flush(self, changes):
        from store.record import Record
        try:
            for key, text in changes.items():
                record = self.session.get(Record, key)
                if record:
                    record.value = text
                else:
                    self.session.add(Record(key=key, value=text))
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error("Database commit failed, rolled back %s: %s", sorted(changes), str(e))
            raise ConsistencyError(f"Could not apply changes to {', '.join(sorted(changes))}") from e


def get_record_store():
    """Store bound to the current app's database session."""
    from src.extensions import db
    return SqlRecordStore(db.session)
