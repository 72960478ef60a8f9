from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from garden.core.errors import (
    InvalidTimestamp,
    MeasurementNotFound,
    NonNumericField,
    TimestampMismatch,
)
from garden.core.timestamps import TimestampKey, normalize_timestamp
from garden.models.measurement import Measurement
from garden.repositories.base import MeasurementRepository

logger = logging.getLogger(__name__)

TIMESTAMP_FIELD = "timestamp"

DEMO_MEASUREMENTS: list[dict[str, str]] = [
    {"timestamp": "2015-09-01T16:00:00.000Z", "temperature": "27.1", "dewPoint": "16.9"},
    {"timestamp": "2015-09-01T16:10:00.000Z", "temperature": "27.3"},
    {"timestamp": "2015-09-01T16:20:00.000Z", "temperature": "27.5", "dewPoint": "17.1"},
    {"timestamp": "2015-09-01T16:30:00.000Z", "temperature": "27.4", "dewPoint": "17.3"},
    {"timestamp": "2015-09-01T16:40:00.000Z", "temperature": "27.2"},
    {"timestamp": "2015-09-01T17:00:00.000Z", "temperature": "28.1", "dewPoint": "18.3"},
]


def to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_readings(fields: Mapping[str, Any]) -> dict[str, float]:
    """Every field except ``timestamp`` must be a finite number or numeric string."""
    readings: dict[str, float] = {}
    for name, value in fields.items():
        if name == TIMESTAMP_FIELD:
            continue
        number = to_float(value)
        if number is None:
            raise NonNumericField()
        readings[name] = number
    return readings


class MeasurementService:
    def __init__(self, repo: MeasurementRepository) -> None:
        self._repo = repo

    def record(self, fields: Mapping[str, Any]) -> str:
        ts = normalize_timestamp(fields.get(TIMESTAMP_FIELD))
        readings = parse_readings(fields)
        self._repo.put(ts.key, readings)
        logger.info(f"Recorded measurement {ts.key} ({len(readings)} readings)")
        return ts.key

    def fetch(self, identifier: str) -> Measurement | list[Measurement]:
        ts = normalize_timestamp(identifier)
        found = self._lookup(ts)
        if not found:
            raise MeasurementNotFound("No data found")
        return found

    def replace(self, identifier: str, fields: Mapping[str, Any]) -> None:
        ts, readings = self._validate_write(identifier, fields)
        self._repo.put(ts.key, readings)
        logger.info(f"Replaced measurement {ts.key}")

    def update(self, identifier: str, fields: Mapping[str, Any]) -> None:
        ts, readings = self._validate_write(identifier, fields)
        self._repo.merge_update(ts.key, readings)
        logger.info(f"Updated measurement {ts.key} fields: {sorted(readings)}")

    def delete(self, identifier: str) -> int:
        ts = normalize_timestamp(identifier)
        found = self._require_existing(ts)
        keys = [ts.key] if ts.is_instant else [m.timestamp for m in found]
        for key in keys:
            self._repo.delete(key)
        logger.info(f"Deleted {len(keys)} measurement(s) for {ts.key}")
        return len(keys)

    def seed(self, records: list[dict[str, str]] | None = None) -> int:
        records = DEMO_MEASUREMENTS if records is None else records
        for fields in records:
            self.record(fields)
        logger.info(f"Seeded {len(records)} demo measurements")
        return len(records)

    def _validate_write(
        self, identifier: str, fields: Mapping[str, Any]
    ) -> tuple[TimestampKey, dict[str, float]]:
        ts = normalize_timestamp(identifier)
        readings = parse_readings(fields)
        try:
            body_ts = normalize_timestamp(fields.get(TIMESTAMP_FIELD))
        except InvalidTimestamp as e:
            raise TimestampMismatch() from e
        if body_ts.key != ts.key:
            raise TimestampMismatch()
        self._require_existing(ts)
        return ts, readings

    def _require_existing(self, ts: TimestampKey) -> list[Measurement]:
        found = self._lookup(ts)
        if not found:
            raise MeasurementNotFound()
        return found if isinstance(found, list) else [found]

    def _lookup(self, ts: TimestampKey) -> Measurement | list[Measurement] | None:
        if ts.is_instant:
            return self._repo.get(ts.key)
        return self._repo.get_by_date_prefix(ts.key) or None
