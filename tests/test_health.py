# tests/test_health.py
from typing import Any

from confighub import __version__


def test_health(client: Any) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_root_describes_api(client: Any) -> None:
    """Verify that the root endpoint reports the service version and docs paths."""
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["version"] == __version__
    assert body["docs"] == "/docs"


def test_error_body_documented(client: Any) -> None:
    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/api/v1/configs/{config_id}"]["get"]["responses"]
    assert responses["404"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/ErrorResponse"
    }
