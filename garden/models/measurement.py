from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StatKind(str, Enum):
    MIN = "min"
    MAX = "max"
    AVERAGE = "average"


@dataclass(frozen=True)
class Measurement:
    timestamp: str
    readings: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, **self.readings}


@dataclass(frozen=True)
class StatResult:
    metric: str
    stat: StatKind
    value: float

    def as_tuple(self) -> tuple[str, str, float]:
        return (self.metric, self.stat.value, self.value)
