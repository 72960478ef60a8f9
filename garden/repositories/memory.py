from __future__ import annotations

import threading
from collections.abc import Mapping

from garden.models.measurement import Measurement


class InMemoryMeasurementRepository:
    """Process-local measurement store keyed by normalized timestamp.

    Iteration follows insertion order. Replacing a record keeps its original
    position, like a plain dict assignment.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, Measurement] = {}

    def put(self, key: str, readings: Mapping[str, float]) -> Measurement:
        record = Measurement(timestamp=key, readings=dict(readings))
        with self._lock:
            self._records[key] = record
        return record

    def merge_update(self, key: str, readings: Mapping[str, float]) -> Measurement:
        with self._lock:
            existing = self._records.get(key)
            merged = dict(existing.readings) if existing is not None else {}
            merged.update(readings)
            record = Measurement(timestamp=key, readings=merged)
            self._records[key] = record
        return record

    def get(self, key: str) -> Measurement | None:
        with self._lock:
            return self._records.get(key)

    def get_by_date_prefix(self, date_prefix: str) -> list[Measurement]:
        with self._lock:
            return [r for k, r in self._records.items() if k.startswith(date_prefix)]

    def delete(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._records)

    def count(self) -> int:
        with self._lock:
            return len(self._records)
