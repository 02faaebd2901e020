from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from gymlog.database import get_session
from gymlog.main import app


def test_routers_mounted(client: TestClient):
    assert client.get("/api/workouts/split").status_code == 200
    assert client.get("/api/exercises/").json() == []
    assert client.get("/api/nutrition/quota").json()["calories"] == 2500
    assert client.get("/api/saved-foods/").json() == []


def test_storage_error_returns_generic_failure():
    broken = MagicMock()
    broken.exec.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
    app.dependency_overrides[get_session] = lambda: broken
    try:
        response = TestClient(app).get("/api/exercises/")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Storage error"}
