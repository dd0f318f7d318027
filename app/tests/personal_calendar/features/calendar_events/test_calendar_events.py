"""Calendar events エンドポイントのテスト。"""

from __future__ import annotations

from fastapi.testclient import TestClient

from personal_calendar.app import create_app
from personal_calendar.core.models import DEFAULT_EVENT_COLOR
from personal_calendar.core.store import EventStore


def _client() -> tuple[TestClient, EventStore]:
    store = EventStore()
    return TestClient(create_app(store=store)), store


def test_create_timed_event() -> None:
    client, store = _client()

    res = client.post(
        "/calendar/events",
        json={"title": "歯医者", "start_date": "2026-04-10", "start_time": "10:00"},
    )

    assert res.status_code == 201
    data = res.json()
    assert data["title"] == "歯医者"
    assert data["end_date"] == "2026-04-10"
    assert data["start_time"] == "10:00:00"
    assert data["all_day"] is False
    assert data["color"] == DEFAULT_EVENT_COLOR
    assert store.get(data["id"]).title == "歯医者"


def test_create_requires_title() -> None:
    client, _ = _client()

    res = client.post("/calendar/events", json={"title": "  ", "start_date": "2026-04-10"})

    assert res.status_code == 422


def test_create_rejects_end_before_start() -> None:
    client, store = _client()

    res = client.post(
        "/calendar/events",
        json={"title": "旅行", "start_date": "2026-04-10", "end_date": "2026-04-09"},
    )

    assert res.status_code == 400
    assert res.json()["detail"]["error"]["code"] == "INVALID_EVENT"
    assert store.list_events() == []


def test_create_rejects_end_time_not_after_start_time() -> None:
    client, _ = _client()

    res = client.post(
        "/calendar/events",
        json={
            "title": "会議",
            "start_date": "2026-04-10",
            "start_time": "11:00",
            "end_time": "10:00",
        },
    )

    assert res.status_code == 400


def test_list_events_filtered_by_day() -> None:
    client, _ = _client()
    client.post("/calendar/events", json={"title": "出張", "start_date": "2026-04-09", "end_date": "2026-04-11"})
    client.post("/calendar/events", json={"title": "別日", "start_date": "2026-04-20"})

    all_events = client.get("/calendar/events").json()["events"]
    on_day = client.get("/calendar/events", params={"on": "2026-04-10"}).json()["events"]

    assert [event["title"] for event in all_events] == ["出張", "別日"]
    assert [event["title"] for event in on_day] == ["出張"]
    assert on_day[0]["all_day"] is True


def test_update_and_delete_event() -> None:
    client, _ = _client()
    created = client.post("/calendar/events", json={"title": "ジム", "start_date": "2026-04-10"}).json()

    res = client.patch(
        f"/calendar/events/{created['id']}",
        json={"title": "ヨガ", "start_time": "18:00", "end_time": "19:00"},
    )

    assert res.status_code == 200
    assert res.json()["title"] == "ヨガ"
    assert res.json()["end_time"] == "19:00:00"

    assert client.delete(f"/calendar/events/{created['id']}").status_code == 204
    assert client.get(f"/calendar/events/{created['id']}").status_code == 404


def test_update_rejects_invalid_merge() -> None:
    client, store = _client()
    created = client.post(
        "/calendar/events",
        json={"title": "連休", "start_date": "2026-05-02", "end_date": "2026-05-06"},
    ).json()

    res = client.patch(f"/calendar/events/{created['id']}", json={"start_date": "2026-05-10"})

    assert res.status_code == 400
    assert store.get(created["id"]).start_date.isoformat() == "2026-05-02"


def test_unknown_event_returns_404() -> None:
    client, _ = _client()

    res = client.get("/calendar/events/missing")

    assert res.status_code == 404
    assert res.json()["detail"]["error"]["code"] == "EVENT_NOT_FOUND"
