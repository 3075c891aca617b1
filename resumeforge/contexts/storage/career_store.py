"""
Persistent SQLite record store for career data and resume history.

Every table holds owner-scoped records: a uuid primary key, the owning user id,
a creation timestamp and the remaining fields as a JSON document. Queries are
always filtered by owner and can be ordered by any record field.
"""

import json
import sqlite3
import uuid
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from resumeforge.contexts.storage.exceptions import (
    RecordNotFoundError,
    StoreUnavailableError,
    UnknownTableError,
)
from resumeforge.contexts.storage.logger import _log_debug, log_import_result, log_record_change
from resumeforge.contexts.templating.career_data_structure import (
    CareerData,
    CareerProfile,
    CertificationItem,
    EducationItem,
    ExperienceItem,
    ProjectItem,
    SkillItem,
)
from resumeforge.utils.timestamp import now_exact

PROFILE_TABLE = "users"
HISTORY_TABLE = "generated_resumes"

# Career item tables: (table name, CareerData attribute, item class, default ordering field)
ITEM_TABLES = (
    ("work_experiences", "experiences", ExperienceItem, "start_date"),
    ("projects", "projects", ProjectItem, "start_date"),
    ("education", "education", EducationItem, "graduation_date"),
    ("skills", "skills", SkillItem, None),
    ("certifications", "certifications", CertificationItem, "issue_date"),
)

TABLES = (PROFILE_TABLE, *(t[0] for t in ITEM_TABLES), HISTORY_TABLE)

# Tables whose records can be added or edited one at a time (history is append-only)
EDITABLE_TYPES = {
    PROFILE_TABLE: CareerProfile,
    **{table: item_cls for table, _, item_cls, _ in ITEM_TABLES},
}

# Columns stored outside the JSON document
_ROW_COLUMNS = ("id", "user_id", "created_at")


class CareerStore:
    """
    SQLite store offering list/get/insert/update/upsert/delete per table.

    Usage:
        with CareerStore(Path("outs/resumeforge.db")) as store:
            exp_id = store.insert("work_experiences", user_id, exp.to_record())
            rows = store.list("work_experiences", user_id, order_by="start_date")
    """

    def __init__(self, db_path: Union[str, Path]):
        """
        Open (and create if needed) the database.

        Args:
            db_path: Path to the SQLite file, or ":memory:"

        Raises:
            StoreUnavailableError: If the database cannot be opened
        """
        self.db_path = db_path
        try:
            if str(db_path) != ":memory:":
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(str(db_path))
            self.conn.row_factory = sqlite3.Row
            self._create_schema()
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailableError("Could not open record store", db_path, e) from e

    def _create_schema(self) -> None:
        for table in TABLES:
            self.conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    data TEXT NOT NULL
                )
            """
            )
            self.conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{table}_user ON {table}(user_id)")
        self.conn.commit()

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "CareerStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_table(table: str) -> None:
        if table not in TABLES:
            raise UnknownTableError(table, TABLES)

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            cursor = self.conn.execute(sql, params)
            self.conn.commit()
            return cursor
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Query failed: {sql.split()[0]}", self.db_path, e) from e

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> Dict[str, Any]:
        record = json.loads(row["data"])
        record.update({column: row[column] for column in _ROW_COLUMNS})
        return record

    @staticmethod
    def _split_record(record: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in record.items() if k not in _ROW_COLUMNS}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list(
        self,
        table: str,
        user_id: str,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> List[Dict[str, Any]]:
        """
        List a user's records.

        Args:
            table: Table name
            user_id: Owner identity
            order_by: Record field to order by (None keeps insertion order)
            descending: Sort direction for order_by

        Returns:
            Records as dicts. Records missing the order_by field sort as the
            largest value, like SQL NULLs: first when descending, last when
            ascending. Equal values keep insertion order.
        """
        self._check_table(table)
        rows = self._execute(
            f"SELECT * FROM {table} WHERE user_id = ? ORDER BY rowid", (user_id,)
        ).fetchall()
        records = [self._row_to_record(row) for row in rows]

        if order_by is None:
            return records

        present = [r for r in records if r.get(order_by) not in (None, "")]
        missing = [r for r in records if r.get(order_by) in (None, "")]
        present = sorted(present, key=lambda r: str(r[order_by]), reverse=descending)
        return missing + present if descending else present + missing

    def get(self, table: str, record_id: str) -> Dict[str, Any]:
        """
        Fetch one record by id.

        Raises:
            RecordNotFoundError: If the id does not exist
        """
        self._check_table(table)
        row = self._execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,)).fetchone()
        if row is None:
            raise RecordNotFoundError(table, record_id)
        return self._row_to_record(row)

    def insert(self, table: str, user_id: str, record: Dict[str, Any]) -> str:
        """
        Insert a new record for a user.

        A missing id is generated. Returns the record id.
        """
        self._check_table(table)
        record_id = record.get("id") or str(uuid.uuid4())
        created_at = record.get("created_at") or now_exact()
        self._execute(
            f"INSERT INTO {table} (id, user_id, created_at, data) VALUES (?, ?, ?, ?)",
            (record_id, user_id, created_at, json.dumps(self._split_record(record))),
        )
        _log_debug(f"Inserted {table}/{record_id}")
        return record_id

    def update(self, table: str, record_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge changes into an existing record.

        Returns:
            The updated record

        Raises:
            RecordNotFoundError: If the id does not exist
        """
        current = self.get(table, record_id)
        data = self._split_record(current)
        data.update(self._split_record(changes))
        self._execute(f"UPDATE {table} SET data = ? WHERE id = ?", (json.dumps(data), record_id))
        _log_debug(f"Updated {table}/{record_id}")
        return self.get(table, record_id)

    def upsert(self, table: str, record: Dict[str, Any], user_id: Optional[str] = None) -> str:
        """
        Insert or replace a record keyed by its id.

        For the users table the owner is the record itself (user_id = id).

        Raises:
            ValueError: If the record has no id
        """
        self._check_table(table)
        record_id = record.get("id")
        if not record_id:
            raise ValueError(f"Upsert into '{table}' requires an 'id'")
        owner = user_id or record.get("user_id") or (record_id if table == PROFILE_TABLE else None)
        if owner is None:
            raise ValueError(f"Upsert into '{table}' requires a user_id")

        existing = self._execute(f"SELECT created_at FROM {table} WHERE id = ?", (record_id,)).fetchone()
        created_at = existing["created_at"] if existing else (record.get("created_at") or now_exact())
        self._execute(
            f"INSERT OR REPLACE INTO {table} (id, user_id, created_at, data) VALUES (?, ?, ?, ?)",
            (record_id, owner, created_at, json.dumps(self._split_record(record))),
        )
        _log_debug(f"Upserted {table}/{record_id}")
        return record_id

    def delete(self, table: str, record_id: str) -> None:
        """
        Delete a record.

        Raises:
            RecordNotFoundError: If the id does not exist
        """
        self._check_table(table)
        cursor = self._execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
        if cursor.rowcount == 0:
            raise RecordNotFoundError(table, record_id)
        _log_debug(f"Deleted {table}/{record_id}")

    def clear(self, table: str, user_id: str) -> int:
        """Delete all of a user's records in one table. Returns the number removed."""
        self._check_table(table)
        cursor = self._execute(f"DELETE FROM {table} WHERE user_id = ?", (user_id,))
        _log_debug(f"Cleared {cursor.rowcount} {table} record(s) for {user_id}")
        return cursor.rowcount


# =============================================================================
# Career data loading and saving
# =============================================================================


def load_profile(store: CareerStore, user_id: str) -> Optional[CareerProfile]:
    """Load a user's profile, or None if they have not saved one yet."""
    try:
        return CareerProfile.from_record(store.get(PROFILE_TABLE, user_id))
    except RecordNotFoundError:
        return None


def load_career(store: CareerStore, user_id: str) -> CareerData:
    """
    Load everything needed to build a resume for one user.

    Experiences and projects come newest first by start date, education by
    graduation date, certifications by issue date; skills keep insertion order.
    A user without a saved profile gets an empty one.
    """
    profile = load_profile(store, user_id) or CareerProfile(id=user_id)
    items = {}
    for table, attribute, item_cls, order_by in ITEM_TABLES:
        records = store.list(table, user_id, order_by=order_by, descending=True)
        items[attribute] = [item_cls.from_record(record) for record in records]
    return CareerData(profile=profile, **items)


def save_career(
    store: CareerStore, user_id: str, career: CareerData, replace: bool = False
) -> Dict[str, int]:
    """
    Save a CareerData bundle for a user.

    The profile is upserted; items are inserted with fresh ids. With replace,
    the user's existing items are deleted first, so re-importing a corrected
    file does not duplicate them.

    Returns:
        Count of inserted items per table
    """
    profile_record = career.profile.to_record()
    profile_record["id"] = user_id
    store.upsert(PROFILE_TABLE, profile_record, user_id=user_id)

    counts = {}
    for table, attribute, _, _ in ITEM_TABLES:
        if replace:
            store.clear(table, user_id)
        items = getattr(career, attribute)
        for item in items:
            record = item.to_record()
            record.pop("id", None)
            store.insert(table, user_id, record)
        counts[table] = len(items)
    log_import_result(user_id, counts)
    return counts


def _validated_record(table: str, record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a record through its career data type.

    Raises:
        ValueError: If the table is not editable, a field is unknown or a value
            is invalid (e.g., an unknown tone)
    """
    item_cls = EDITABLE_TYPES.get(table)
    if item_cls is None:
        raise ValueError(f"Records in '{table}' cannot be added or edited")

    known = {f.name for f in fields(item_cls)}
    unknown = sorted(set(record) - known - set(_ROW_COLUMNS))
    if unknown:
        raise ValueError(f"Unknown field(s) for {table}: {', '.join(unknown)}")

    normalized = item_cls.from_record(record).to_record()
    normalized.pop("id", None)
    return normalized


def add_item(store: CareerStore, table: str, user_id: str, record: Dict[str, Any]) -> str:
    """
    Add one career item for a user. Returns the new record id.

    Raises:
        ValueError: For the profile or history tables, or invalid fields
    """
    if table == PROFILE_TABLE:
        raise ValueError("The profile is created by import; edit it with update")
    record_id = store.insert(table, user_id, _validated_record(table, record))
    log_record_change("Added", table, record_id)
    return record_id


def update_item(
    store: CareerStore, table: str, record_id: str, changes: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Change fields of one profile or career item record.

    Fields not named in changes keep their stored values.

    Returns:
        The updated record

    Raises:
        ValueError: For the history table, or invalid fields
        RecordNotFoundError: If the id does not exist
    """
    _validated_record(table, changes)
    current = store.get(table, record_id)
    merged = _validated_record(table, {**current, **changes})
    updated = store.update(table, record_id, merged)
    log_record_change("Updated", table, record_id, sorted(changes))
    return updated
