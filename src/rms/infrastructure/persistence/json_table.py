"""A JSON file holding a list of records, guarded by the store lock."""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from rms.domain.model.value_objects import Money


class JsonTable:

    def __init__(self, file_path: Path, lock: threading.RLock) -> None:
        self.file_path = file_path
        self._lock = lock
        self._ensure_file()

    def load(self) -> list[dict]:
        with self._lock:
            return json.loads(self.file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        with self._lock:
            self.file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )

    def upsert(self, record: dict, key: str = "id") -> None:
        records = self.load()
        for i, raw in enumerate(records):
            if raw[key] == record[key]:
                records[i] = record
                break
        else:
            records.append(record)
        self.persist(records)

    def next_id(self) -> int:
        return max((r["id"] for r in self.load()), default=0) + 1

    def _ensure_file(self) -> None:
        if not self.file_path.exists():
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text("[]", encoding="utf-8")


# --- Field codecs -------------------------------------------------------------


def money_to_raw(value: Money | None) -> str | None:
    return None if value is None else str(value.amount)


def money_from_raw(raw: str | None, currency: str = "INR") -> Money | None:
    return None if raw is None else Money(Decimal(raw), currency)


def dt_to_raw(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def dt_from_raw(raw: str | None) -> datetime | None:
    return None if raw is None else datetime.fromisoformat(raw)
