from __future__ import annotations

from fastapi import status


class MeasurementError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Invalid measurement request"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidTimestamp(MeasurementError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Must provide timestamp in ISO format"


class NonNumericField(MeasurementError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Data must consist of floating point numbers only"


class TimestampMismatch(MeasurementError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Mismatched timestamps in data"


class MeasurementNotFound(MeasurementError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "No stored data to act on"
