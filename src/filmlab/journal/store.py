"""
Calculation journal.

Keeps a personal log of saved calculations in SQLite. Records are created on
explicit save, removed on explicit delete and otherwise never modified.
Listing returns the newest record first.
"""

import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from filmlab.config import get_settings
from filmlab.core.logging import get_logger
from filmlab.development.calculator import DevelopmentResult, format_seconds
from filmlab.pushpull.calculator import PushPullStep
from filmlab.reference.models import Developer, Film

logger = get_logger(__name__)

PUSH_PULL_FILM_NAME = "Calculated time"
PUSH_PULL_DEVELOPER_NAME = "Custom calculation"
PUSH_PULL_ISO = 400


class CalculationRecord(BaseModel):
    """A saved calculation."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    film_name: str
    developer_name: str
    dilution: str = Field(default="", description="Dilution or free text describing the calculation")
    iso: int = Field(..., gt=0)
    temperature: float = Field(..., allow_inf_nan=False)
    time: int = Field(..., ge=0, description="Resulting time in seconds")
    created_at: datetime = Field(default_factory=datetime.now)

    def format_time(self) -> str:
        return format_seconds(self.time)


def record_from_development(
    result: DevelopmentResult,
    film: Film,
    developer: Developer,
) -> CalculationRecord:
    """Journal entry for a development time calculation."""
    return CalculationRecord(
        film_name=film.name,
        developer_name=developer.name,
        dilution=result.dilution,
        iso=result.iso,
        temperature=result.temperature,
        time=result.time,
    )


def record_from_push_pull(
    steps: Sequence[PushPullStep],
    coefficient: float,
    temperature: float,
) -> CalculationRecord:
    """Journal entry for a push/pull ladder.

    The first (base) entry is stored as the time; coefficient and temperature
    are kept in the dilution text.

    Raises:
        ValueError: If the ladder is empty.
    """
    if not steps:
        raise ValueError("Cannot save an empty push/pull result")

    return CalculationRecord(
        film_name=PUSH_PULL_FILM_NAME,
        developer_name=PUSH_PULL_DEVELOPER_NAME,
        dilution=f"Coefficient: {coefficient}, Temperature: {temperature:.1f}°C",
        iso=PUSH_PULL_ISO,
        temperature=temperature,
        time=steps[0].total_seconds,
    )


class CalculationJournal:
    """SQLite-backed storage for CalculationRecord."""

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize journal.

        Args:
            db_path: Path to SQLite database file, or ":memory:".
                    If None, uses the configured journal path.
        """
        if db_path is None:
            db_path = get_settings().get_journal_path()

        self.db_path = Path(db_path)
        if str(self.db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._lock = threading.Lock()
        self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with self._lock:
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS calculation_records (
                    record_id TEXT PRIMARY KEY,
                    film_name TEXT NOT NULL,
                    developer_name TEXT NOT NULL,
                    dilution TEXT,
                    iso INTEGER NOT NULL,
                    temperature REAL NOT NULL,
                    time INTEGER NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            self._conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_created_at ON calculation_records(created_at)"
            )
            self._conn.commit()

    def save(self, record: CalculationRecord) -> CalculationRecord:
        """Store a record and return it."""
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO calculation_records (
                    record_id, film_name, developer_name, dilution,
                    iso, temperature, time, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(record.id),
                    record.film_name,
                    record.developer_name,
                    record.dilution,
                    record.iso,
                    record.temperature,
                    record.time,
                    record.created_at.isoformat(timespec="microseconds"),
                ),
            )
            self._conn.commit()

        logger.info(f"Saved calculation record {record.id}")
        return record

    def get(self, record_id: UUID) -> Optional[CalculationRecord]:
        """Get a record by ID, or None if not found."""
        with self._lock:
            row = self._conn.execute(
                "SELECT * FROM calculation_records WHERE record_id = ?", (str(record_id),)
            ).fetchone()
        return self._row_to_record(row) if row else None

    def list_records(self, limit: Optional[int] = None) -> list[CalculationRecord]:
        """All records, newest first."""
        query = "SELECT * FROM calculation_records ORDER BY created_at DESC, rowid DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)

        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        return [self._row_to_record(row) for row in rows]

    def delete(self, record_id: UUID) -> bool:
        """
        Delete a record.

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            cursor = self._conn.execute(
                "DELETE FROM calculation_records WHERE record_id = ?", (str(record_id),)
            )
            self._conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted calculation record {record_id}")
        return deleted

    def clear(self) -> int:
        """Delete every record. Returns the number removed."""
        with self._lock:
            cursor = self._conn.execute("DELETE FROM calculation_records")
            self._conn.commit()
            return cursor.rowcount

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __len__(self) -> int:
        with self._lock:
            (count,) = self._conn.execute("SELECT COUNT(*) FROM calculation_records").fetchone()
        return count

    @staticmethod
    def _row_to_record(row: tuple) -> CalculationRecord:
        record_id, film_name, developer_name, dilution, iso, temperature, time, created_at = row
        return CalculationRecord(
            id=UUID(record_id),
            film_name=film_name,
            developer_name=developer_name,
            dilution=dilution or "",
            iso=iso,
            temperature=temperature,
            time=time,
            created_at=datetime.fromisoformat(created_at),
        )
