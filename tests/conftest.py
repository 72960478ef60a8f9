from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from garden.api import deps
from garden.core.config import Settings
from garden.factory import create_app
from garden.repositories.memory import InMemoryMeasurementRepository
from garden.services.measurements import MeasurementService
from tests.support import make_settings


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def repo() -> InMemoryMeasurementRepository:
    return InMemoryMeasurementRepository()


@pytest.fixture()
def seeded_repo(repo: InMemoryMeasurementRepository) -> InMemoryMeasurementRepository:
    MeasurementService(repo).seed()
    return repo


@pytest.fixture()
def client(settings: Settings, repo: InMemoryMeasurementRepository) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_measurement_repository] = lambda: repo
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def seeded_client(
    settings: Settings, seeded_repo: InMemoryMeasurementRepository
) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[deps.get_measurement_repository] = lambda: seeded_repo
    with TestClient(app) as client:
        yield client
