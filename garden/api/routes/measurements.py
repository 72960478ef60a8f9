from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from garden.api.deps import BodyFields, get_measurement_service
from garden.core.errors import MeasurementError
from garden.schemas.measurements import MeasurementRead
from garden.services.measurements import MeasurementService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/measurements")

Service = Annotated[MeasurementService, Depends(get_measurement_service)]


def _to_http(e: MeasurementError) -> HTTPException:
    logger.warning(f"Rejected measurement request: {e.detail}")
    return HTTPException(status_code=e.status_code, detail=e.detail)


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def record_measurement(request: Request, fields: BodyFields, service: Service) -> Response:
    try:
        key = service.record(fields)
    except MeasurementError as e:
        raise _to_http(e) from e
    location = request.app.url_path_for("read_measurement", timestamp=key)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": str(location)})


@router.get(
    "/{timestamp}",
    response_model=MeasurementRead | list[MeasurementRead],
)
def read_measurement(timestamp: str, service: Service) -> MeasurementRead | list[MeasurementRead]:
    """One measurement for an instant, or every measurement recorded on a date."""
    try:
        found = service.fetch(timestamp)
    except MeasurementError as e:
        raise _to_http(e) from e
    if isinstance(found, list):
        return [MeasurementRead.from_record(r) for r in found]
    return MeasurementRead.from_record(found)


@router.put("/{timestamp}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def replace_measurement(timestamp: str, fields: BodyFields, service: Service) -> Response:
    try:
        service.replace(timestamp, fields)
    except MeasurementError as e:
        raise _to_http(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{timestamp}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_measurement(timestamp: str, fields: BodyFields, service: Service) -> Response:
    """Overwrite only the given fields; all other fields keep their values."""
    try:
        service.update(timestamp, fields)
    except MeasurementError as e:
        raise _to_http(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{timestamp}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_measurement(timestamp: str, service: Service) -> Response:
    try:
        service.delete(timestamp)
    except MeasurementError as e:
        raise _to_http(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
