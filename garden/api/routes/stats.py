from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from garden.api.deps import get_stats_service
from garden.schemas.stats import StatTuple
from garden.services.stats import StatsQuery, StatsService

router = APIRouter(prefix="/stats")

METRIC_PARAM_DESCRIPTION = "Metric name, e.g. temperature. Repeatable."
STAT_PARAM_DESCRIPTION = "Statistic to compute: min, max or average. Repeatable."


@router.get("", response_model=list[StatTuple])
def read_stats(
    service: Annotated[StatsService, Depends(get_stats_service)],
    metric: Annotated[list[str], Query(description=METRIC_PARAM_DESCRIPTION)] = [],
    stat: Annotated[list[str], Query(description=STAT_PARAM_DESCRIPTION)] = [],
    from_datetime: Annotated[str | None, Query(alias="fromDateTime")] = None,
    to_datetime: Annotated[str | None, Query(alias="toDateTime")] = None,
) -> list[StatTuple]:
    """Min/max/average per requested metric, grouped by metric in request order.

    Unknown stat names and unparsable time bounds are ignored.
    """
    query = StatsQuery.from_params(
        metrics=metric,
        stats=stat,
        from_datetime=from_datetime,
        to_datetime=to_datetime,
    )
    return [result.as_tuple() for result in service.compute(query)]
