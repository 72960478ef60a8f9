from __future__ import annotations

import json
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from garden.core.errors import NonNumericField
from garden.repositories.base import MeasurementRepository
from garden.services.measurements import MeasurementService
from garden.services.stats import StatsService

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_measurement_repository(request: Request) -> MeasurementRepository:
    return request.app.state.measurement_repository


def get_measurement_service(
    repo: Annotated[MeasurementRepository, Depends(get_measurement_repository)],
) -> MeasurementService:
    return MeasurementService(repo)


def get_stats_service(
    repo: Annotated[MeasurementRepository, Depends(get_measurement_repository)],
) -> StatsService:
    return StatsService(repo)


async def get_body_fields(request: Request) -> dict[str, Any]:
    """Parse a JSON object or form body into a field map.

    Repeated field names keep the last value.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.multi_items()}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body"
        ) from e
    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=NonNumericField.detail
        )
    return payload


BodyFields = Annotated[dict[str, Any], Depends(get_body_fields)]
