"""CSV storage for the local entry collection with atomic writes."""

import csv
import logging
import os
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

from work_scheduler.core.models import TimeEntry

logger = logging.getLogger(__name__)

ENTRY_FIELDS = [
    "id",
    "project",
    "description",
    "date",
    "hours",
    "start_time",
    "end_time",
    "created_at",
]


def _lock_file(file_obj: Any, exclusive: bool = True) -> None:
    """Lock a file in a cross-platform way.

    Args:
        file_obj: File object to lock
        exclusive: If True, acquire exclusive lock; if False, acquire shared lock
    """
    if sys.platform == "win32":
        import msvcrt  # type: ignore[import-not-found]

        mode = msvcrt.LK_NBLCK if exclusive else msvcrt.LK_NBRLCK
        msvcrt.locking(file_obj.fileno(), mode, 1)
    else:
        import fcntl  # type: ignore[import-not-found]

        mode = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(file_obj.fileno(), mode)


def _unlock_file(file_obj: Any) -> None:
    """Unlock a file in a cross-platform way."""
    if sys.platform == "win32":
        import msvcrt  # type: ignore[import-not-found]

        msvcrt.locking(file_obj.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        import fcntl  # type: ignore[import-not-found]

        fcntl.flock(file_obj.fileno(), fcntl.LOCK_UN)


class StorageManager:
    """Manages the CSV file holding the local entry collection."""

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize storage manager.

        Args:
            data_dir: Custom data directory. Defaults to ~/.work-scheduler/data
        """
        if data_dir is None:
            data_dir = Path.home() / ".work-scheduler" / "data"

        self.data_dir = data_dir
        self.entries_file = self.data_dir / "entries.csv"

        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.entries_file.exists():
            self._write_csv_atomic(self.entries_file, ENTRY_FIELDS, [])

    def _write_csv_atomic(
        self, file_path: Path, fieldnames: list[str], rows: list[dict[str, Any]]
    ) -> None:
        """Write CSV file atomically using temporary file and rename.

        Args:
            file_path: Target file path
            fieldnames: CSV field names
            rows: List of row dictionaries
        """
        temp_file = file_path.with_suffix(".tmp")

        try:
            with open(temp_file, "w", newline="", encoding="utf-8") as f:
                _lock_file(f, exclusive=True)

                writer = csv.DictWriter(f, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(rows)

                f.flush()
                os.fsync(f.fileno())

                _unlock_file(f)

            temp_file.replace(file_path)

        except Exception:
            if temp_file.exists():
                temp_file.unlink()
            raise

    def _read_csv(self, file_path: Path) -> list[dict[str, Any]]:
        """Read CSV file with a shared lock.

        Args:
            file_path: CSV file to read

        Returns:
            List of row dictionaries
        """
        if not file_path.exists():
            return []

        with open(file_path, encoding="utf-8") as f:
            _lock_file(f, exclusive=False)

            try:
                reader = csv.DictReader(f)
                rows = list(reader)
            finally:
                _unlock_file(f)

        return rows

    def save_entry(self, entry: TimeEntry) -> None:
        """Append an entry, or overwrite the row with the same id.

        Args:
            entry: Entry to save
        """
        rows = self._read_csv(self.entries_file)
        entry_dict = entry.to_dict()

        for i, row in enumerate(rows):
            if row["id"] == entry.id:
                rows[i] = entry_dict
                break
        else:
            rows.append(entry_dict)

        self._write_csv_atomic(self.entries_file, ENTRY_FIELDS, rows)
        logger.debug("Saved entry %s", entry.id)

    def load_entries(self) -> list[TimeEntry]:
        """Load all entries in insertion order."""
        return [TimeEntry.from_dict(row) for row in self._read_csv(self.entries_file)]

    def get_entry(self, entry_id: str) -> Optional[TimeEntry]:
        """Look up a single entry by id."""
        for entry in self.load_entries():
            if entry.id == entry_id:
                return entry
        return None

    def replace_entries(self, entries: Iterable[TimeEntry]) -> int:
        """Replace the whole collection.

        Args:
            entries: New collection

        Returns:
            Number of entries written
        """
        rows = [entry.to_dict() for entry in entries]
        self._write_csv_atomic(self.entries_file, ENTRY_FIELDS, rows)
        logger.info("Replaced local collection with %d entries", len(rows))
        return len(rows)
