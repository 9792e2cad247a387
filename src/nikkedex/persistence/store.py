# ABOUTME: JSON file store for final character records
# ABOUTME: Pydantic TypeAdapter round-trips the array; names are deduplicated case-insensitively

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from nikkedex.config import get_config
from nikkedex.core.models import Nikke
from nikkedex.utils.logging import get_logger

_RECORDS = TypeAdapter(list[Nikke])


class StoreError(Exception):
    """Raised when the store file exists but cannot be read as a record array."""

    pass


def _key(name: str) -> str:
    return name.casefold()


class NikkeStore:
    """In-memory view of the record file, keyed by case-folded character name."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_config().database_path
        self._records: dict[str, Nikke] = {}
        self.logger = get_logger(__name__)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self.records())

    def load(self) -> NikkeStore:
        """Read the file if present; a missing file means an empty store."""
        if not self.path.exists():
            self.logger.info("No existing store, starting empty", path=str(self.path))
            self._records = {}
            return self

        try:
            records = _RECORDS.validate_json(self.path.read_bytes())
        except ValidationError as e:
            raise StoreError(f"Could not read records from {self.path}: {e}") from e

        self._records = {}
        for record in records:
            self.add(record)

        self.logger.info("Loaded store", path=str(self.path), record_count=len(self._records))
        return self

    def contains(self, name: str) -> bool:
        return _key(name) in self._records

    def add(self, record: Nikke) -> bool:
        """Add a record unless one with the same name (ignoring case) is stored."""
        key = _key(record.name)
        if key in self._records:
            return False
        self._records[key] = record
        return True

    def records(self) -> list[Nikke]:
        """All records sorted by name."""
        return sorted(self._records.values(), key=lambda record: _key(record.name))

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = _RECORDS.dump_json(self.records(), indent=2, exclude_none=True)
        self.path.write_bytes(payload + b"\n")
        self.logger.info("Saved store", path=str(self.path), record_count=len(self._records))
