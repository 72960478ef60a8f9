from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from garden.models.measurement import Measurement


class MeasurementRead(BaseModel):
    """A stored measurement: ``timestamp`` plus one float per metric."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "timestamp": "2015-09-01T16:00:00.000Z",
                "temperature": 27.1,
                "dewPoint": 16.9,
            }
        },
    )

    timestamp: str

    @classmethod
    def from_record(cls, record: Measurement) -> MeasurementRead:
        return cls.model_validate(record.to_dict())


class ServiceInfo(BaseModel):
    name: str
    status: str
    routes: list[str]


class HealthStatus(BaseModel):
    status: str
    measurements: int
