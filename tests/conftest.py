from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.math import SumaRequest
from app.services.math import MathService, get_math_service


class ExplodingMathService(MathService):
    def __init__(self) -> None:
        self.calls = 0

    def sum(self, request: SumaRequest | None):  # type: ignore[override]
        self.calls += 1
        raise RuntimeError("database exploded with secret detail")


@pytest.fixture(autouse=True)
def clear_dependency_overrides() -> Generator[None, None, None]:
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def exploding_service() -> ExplodingMathService:
    service = ExplodingMathService()
    app.dependency_overrides[get_math_service] = lambda: service
    return service


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
