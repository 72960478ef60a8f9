from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from garden.core.timestamps import parse_instant
from garden.models.measurement import StatKind, StatResult
from garden.repositories.base import MeasurementRepository

logger = logging.getLogger(__name__)

STAT_ORDER: tuple[StatKind, ...] = (StatKind.MIN, StatKind.MAX, StatKind.AVERAGE)


@dataclass(frozen=True)
class StatsQuery:
    """Metrics and statistics to compute, plus an optional ``[start, stop)`` range."""

    metrics: list[str] = field(default_factory=list)
    stats: frozenset[StatKind] = frozenset()
    start: datetime | None = None
    stop: datetime | None = None

    @classmethod
    def from_params(
        cls,
        *,
        metrics: Sequence[str] | None = None,
        stats: Iterable[str] | None = None,
        from_datetime: str | None = None,
        to_datetime: str | None = None,
    ) -> StatsQuery:
        allowed = {kind.value: kind for kind in StatKind}
        kinds = frozenset(allowed[s] for s in (stats or []) if s in allowed)
        return cls(
            metrics=list(metrics or []),
            stats=kinds,
            start=_parse_bound("fromDateTime", from_datetime),
            stop=_parse_bound("toDateTime", to_datetime),
        )

    @property
    def is_time_restricted(self) -> bool:
        return self.start is not None or self.stop is not None

    def includes(self, instant: datetime) -> bool:
        if self.start is not None and instant < self.start:
            return False
        if self.stop is not None and instant >= self.stop:
            return False
        return True


def _parse_bound(name: str, value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = parse_instant(value)
    if parsed is None:
        logger.warning(f"Ignoring unparsable {name}={value!r}")
    return parsed


@dataclass
class _RunningStats:
    min: float
    max: float
    values: list[float]

    def add(self, value: float) -> None:
        if value < self.min:
            self.min = value
        if value > self.max:
            self.max = value
        self.values.append(value)

    @property
    def average(self) -> float:
        total = 0.0
        for value in self.values:
            total += value
        return total / len(self.values)


def compute_stats(repo: MeasurementRepository, query: StatsQuery) -> list[StatResult]:
    running: dict[str, _RunningStats] = {}
    wanted = list(dict.fromkeys(query.metrics))

    for key in repo.keys():
        if query.is_time_restricted:
            instant = parse_instant(key)
            if instant is None or not query.includes(instant):
                continue
        record = repo.get(key)
        if record is None:
            continue
        for metric in wanted:
            value = record.readings.get(metric)
            if value is None:
                continue
            if metric in running:
                running[metric].add(value)
            else:
                running[metric] = _RunningStats(min=value, max=value, values=[value])

    results: list[StatResult] = []
    for metric in query.metrics:
        acc = running.get(metric)
        if acc is None:
            continue
        for kind in STAT_ORDER:
            if kind not in query.stats:
                continue
            if kind is StatKind.MIN:
                value = acc.min
            elif kind is StatKind.MAX:
                value = acc.max
            else:
                value = acc.average
            results.append(StatResult(metric=metric, stat=kind, value=value))
    return results


class StatsService:
    def __init__(self, repo: MeasurementRepository) -> None:
        self._repo = repo

    def compute(self, query: StatsQuery) -> list[StatResult]:
        results = compute_stats(self._repo, query)
        logger.debug(
            f"Computed {len(results)} stats for metrics={query.metrics} "
            f"stats={sorted(k.value for k in query.stats)}"
        )
        return results
