from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from garden.models.measurement import Measurement


class MeasurementRepository(Protocol):
    def put(self, key: str, readings: Mapping[str, float]) -> Measurement: ...

    def merge_update(self, key: str, readings: Mapping[str, float]) -> Measurement: ...

    def get(self, key: str) -> Measurement | None: ...

    def get_by_date_prefix(self, date_prefix: str) -> list[Measurement]: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...

    def count(self) -> int: ...
