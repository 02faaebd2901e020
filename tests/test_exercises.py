from urllib.parse import quote

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlmodel import Session

from gymlog.database import get_session
from gymlog.routers.exercises import router
from gymlog.services.sessions import save_entry, start_workout

CURL = "EZ-Bar Curl"
D1 = "2026-01-10T10:00:00.000Z"
D2 = "2026-01-12T10:00:00.000Z"


@pytest.fixture(name="client")
def client_fixture(session: Session):
    test_app = FastAPI()
    test_app.include_router(router, prefix="/api/exercises")
    test_app.dependency_overrides[get_session] = lambda: session
    return TestClient(test_app)


@pytest.fixture(name="workout_id")
def workout_id_fixture(session: Session) -> int:
    return start_workout(session, 1, started_at="2026-01-10T09:00:00.000Z")


def _url(name: str, suffix: str) -> str:
    return f"/api/exercises/{quote(name)}/{suffix}"


# ---------------------------------------------------------------------------
# Scheme / summary
# ---------------------------------------------------------------------------


def test_scheme(client: TestClient):
    response = client.get(_url("Elbow Plank", "scheme"))
    assert response.status_code == 200
    assert response.json() == {
        "min": 30,
        "max": 120,
        "step": 15,
        "unit_label": "sec",
        "values": [30, 45, 60, 75, 90, 105, 120],
    }


def test_summary_without_history(client: TestClient):
    response = client.get(_url(CURL, "summary"))
    assert response.status_code == 200
    body = response.json()
    assert body["last_entry"] is None
    assert body["last_line"] == "No data"
    assert body["ready_to_upgrade"] is False
    assert body["add_form"] == {"weight": "0", "top_reps": 8, "back_reps": 8}


def test_summary_ready_to_upgrade(client: TestClient, session: Session, workout_id: int):
    save_entry(session, workout_id, CURL, 30, 10, 9, date=D1)
    save_entry(session, workout_id, CURL, 30, 12, 12, date=D2)

    body = client.get(_url(CURL, "summary")).json()

    assert body["last_entry"]["date"] == D2
    assert body["last_line"] == "30kg × 12 / 12"
    assert body["ready_to_upgrade"] is True
    assert body["add_form"] == {"weight": "30", "top_reps": 12, "back_reps": 12}


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


def test_save_and_list_entry(client: TestClient, workout_id: int):
    response = client.post(
        _url(CURL, "entries"),
        json={"workout_id": workout_id, "weight": "30", "top_reps": 10, "back_reps": 8},
    )
    assert response.status_code == 201
    saved = response.json()
    assert (saved["weight"], saved["top_reps"], saved["back_reps"]) == (30, 10, 8)

    entries = client.get(_url(CURL, "entries")).json()
    assert len(entries) == 1
    assert entries[0]["date"] == saved["date"]
    assert entries[0]["unit"] == "kg"


def test_save_entry_bad_weight(client: TestClient, workout_id: int):
    response = client.post(
        _url(CURL, "entries"),
        json={"workout_id": workout_id, "weight": "", "top_reps": 10, "back_reps": 8},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Enter weight."


def test_save_entry_missing_reps(client: TestClient, workout_id: int):
    response = client.post(
        _url(CURL, "entries"),
        json={"workout_id": workout_id, "weight": 30, "top_reps": 10},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Enter both sets."


def test_save_entry_unknown_workout(client: TestClient):
    response = client.post(
        _url(CURL, "entries"),
        json={"workout_id": 99999, "weight": 30, "top_reps": 10, "back_reps": 8},
    )
    assert response.status_code == 404


def test_list_entries_limit_and_display_date(client: TestClient, session: Session, workout_id: int):
    save_entry(session, workout_id, CURL, 30, 10, 8, date=D1)
    save_entry(session, workout_id, CURL, 30, 11, 9, date=D2)

    entries = client.get(_url(CURL, "entries"), params={"limit": 1}).json()

    assert [e["date"] for e in entries] == [D2]
    assert entries[0]["display_date"].endswith(".26")


def test_delete_entry(client: TestClient, session: Session, workout_id: int):
    save_entry(session, workout_id, CURL, 30, 10, 8, date=D1)
    save_entry(session, workout_id, CURL, 30, 11, 9, date=D2)

    response = client.delete(_url(CURL, "entries"), params={"date": D1})

    assert response.status_code == 204
    assert [e["date"] for e in client.get(_url(CURL, "entries")).json()] == [D2]


def test_history(client: TestClient, session: Session, workout_id: int):
    save_entry(session, workout_id, CURL, 30, 10, 8, date=D1)

    rows = client.get(_url(CURL, "history")).json()

    assert len(rows) == 2
    assert {r["set_type"] for r in rows} == {"TOP_SET", "BACK_OFF"}
    assert rows[0]["planned_name"] == "DAY 2. BACK / BICEPS / FOREARMS"


def test_list_exercises(client: TestClient, session: Session, workout_id: int):
    assert client.get("/api/exercises/").json() == []
    save_entry(session, workout_id, CURL, 30, 10, 8, date=D1)
    save_entry(session, workout_id, "Cable Bar Curl", 20, 10, 8, date=D1)
    assert client.get("/api/exercises/").json() == ["Cable Bar Curl", CURL]
