import logging
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.models.math import INT32_MAX, INT32_MIN

ENVELOPE_KEYS = {"error", "message", "details", "timestamp"}


def _post_raw(client: TestClient, content: str | bytes, content_type: str = "application/json"):
    return client.post("/api/suma", content=content, headers={"Content-Type": content_type})


@pytest.mark.parametrize(("a", "b"), [(INT32_MAX, 1), (INT32_MIN, -1), (INT32_MAX, INT32_MAX)])
def test_overflow_returns_validation_envelope(client: TestClient, a: int, b: int) -> None:
    response = client.post("/api/suma", json={"A": a, "B": b})
    assert response.status_code == 400
    payload = response.json()
    assert set(payload) == ENVELOPE_KEYS
    assert payload["error"] is True
    assert payload["message"] == "validation error"
    assert "overflow" in payload["details"].lower()
    assert f"{a} + {b}" in payload["details"]


def test_overflow_envelope_timestamp_is_current(client: TestClient) -> None:
    response = client.post("/api/suma", json={"A": INT32_MAX, "B": 1})
    timestamp = datetime.fromisoformat(response.json()["timestamp"].replace("Z", "+00:00"))
    assert abs(datetime.now(UTC) - timestamp) < timedelta(seconds=1)


def test_missing_body_returns_bad_request(client: TestClient) -> None:
    response = client.post("/api/suma")
    assert response.status_code == 400
    assert response.json()["message"] == "request body cannot be empty"


def test_empty_body_returns_bad_request(client: TestClient) -> None:
    response = _post_raw(client, "")
    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] is True
    assert payload["message"] == "request body cannot be empty"
    assert payload["details"] is None


def test_json_null_body_returns_bad_request(client: TestClient) -> None:
    response = _post_raw(client, "null")
    assert response.status_code == 400
    assert response.json()["message"] == "request body cannot be empty"


@pytest.mark.parametrize("body", ["{ invalid json }", "{", b"\xff\xfe{"])
def test_malformed_json_returns_envelope(client: TestClient, body: str | bytes) -> None:
    response = _post_raw(client, body)
    assert response.status_code == 400
    payload = response.json()
    assert set(payload) == ENVELOPE_KEYS
    assert payload["error"] is True
    assert payload["message"] == "invalid request body"
    assert payload["details"]


@pytest.mark.parametrize(
    "body",
    [
        {"A": "5", "B": 1},
        {"A": 1.5, "B": 1},
        {"A": True, "B": 1},
        {"A": INT32_MAX + 1, "B": 0},
        [1, 2],
    ],
)
def test_wrong_shape_is_rejected(client: TestClient, body: object) -> None:
    response = client.post("/api/suma", json=body)
    assert response.status_code == 400
    assert response.json()["message"] == "invalid request body"


def test_non_json_content_type_returns_unsupported_media_type(client: TestClient) -> None:
    response = _post_raw(client, '{"A": 1, "B": 2}', content_type="text/plain; charset=utf-8")
    assert response.status_code == 415
    payload = response.json()
    assert payload["error"] is True
    assert payload["message"] == "unsupported media type"


def test_body_without_content_type_returns_unsupported_media_type(client: TestClient) -> None:
    response = client.post("/api/suma", content=b'{"A": 1, "B": 2}')
    assert "content-type" not in response.request.headers
    assert response.status_code == 415
    payload = response.json()
    assert payload["error"] is True
    assert payload["message"] == "unsupported media type"


def test_unexpected_failure_is_logged_with_route(
    client: TestClient, exploding_service, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.ERROR, logger="app.core.errors"):
        response = client.post("/api/suma", json={"A": 1, "B": 2})

    assert response.status_code == 500
    records = [record for record in caplog.records if record.exc_info]
    assert records
    assert records[0].path == "/api/suma"
    assert records[0].method == "POST"
    assert records[0].status_code == 500


def test_unexpected_failure_returns_internal_error(client: TestClient, exploding_service) -> None:
    response = client.post("/api/suma", json={"A": 1, "B": 2})
    assert response.status_code == 500
    assert exploding_service.calls == 1
    payload = response.json()
    assert payload["error"] is True
    assert payload["message"] == "internal server error"
    assert payload["details"] is None
    assert "secret" not in response.text


def test_unknown_route_uses_envelope(client: TestClient) -> None:
    response = client.get("/api/resta")
    assert response.status_code == 404
    payload = response.json()
    assert payload["error"] is True
    assert payload["message"] == "Not Found"


def test_wrong_method_uses_envelope(client: TestClient) -> None:
    response = client.get("/api/suma")
    assert response.status_code == 405
    assert response.json()["error"] is True
    assert "POST" in response.headers["allow"]
