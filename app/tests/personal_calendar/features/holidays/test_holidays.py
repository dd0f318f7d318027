"""祝日フィード読み込みのテスト。"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from personal_calendar.app import create_app
from personal_calendar.clients.http_client import HttpFetchError
from personal_calendar.features.holidays.usecase_holidays import (
    build_holiday_map,
    list_holidays,
    load_holidays,
)

_HOLIDAYS_ICS = (
    "BEGIN:VCALENDAR\r\n"
    "VERSION:2.0\r\n"
    "BEGIN:VEVENT\r\n"
    "DTSTART;VALUE=DATE:20260101\r\n"
    "DTEND;VALUE=DATE:20260102\r\n"
    "SUMMARY:元日\r\n"
    "END:VEVENT\r\n"
    "BEGIN:VEVENT\r\n"
    "DTSTART;VALUE=DATE:20260429\r\n"
    "DTEND;VALUE=DATE:20260430\r\n"
    "SUMMARY:昭和の日\r\n"
    "END:VEVENT\r\n"
    "BEGIN:VEVENT\r\n"
    "DTSTART;VALUE=DATE:20270101\r\n"
    "DTEND;VALUE=DATE:20270102\r\n"
    "SUMMARY:元日\r\n"
    "END:VEVENT\r\n"
    "END:VCALENDAR\r\n"
)


def test_holidays_loaded_from_file_at_startup(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    feed = tmp_path / "holidays.ics"
    feed.write_text(_HOLIDAYS_ICS, encoding="utf-8")
    monkeypatch.setenv("HOLIDAY_FEED_SOURCE", str(feed))

    with TestClient(create_app()) as client:
        res = client.get("/holidays", params={"year": 2026})

    assert res.status_code == 200
    assert res.json() == {
        "holidays": [
            {"day": "2026-01-01", "name": "元日"},
            {"day": "2026-04-29", "name": "昭和の日"},
        ]
    }


def test_holidays_loaded_from_url() -> None:
    with patch(
        "personal_calendar.features.holidays.usecase_holidays.http_client.fetch_text",
        return_value=_HOLIDAYS_ICS,
    ) as mock_fetch:
        holidays = load_holidays("https://example.com/holidays.ics")

    mock_fetch.assert_called_once_with("https://example.com/holidays.ics")
    assert holidays[date(2026, 4, 29)] == "昭和の日"


def test_fetch_failure_leaves_holidays_empty() -> None:
    with patch(
        "personal_calendar.features.holidays.usecase_holidays.http_client.fetch_text",
        side_effect=HttpFetchError("boom", 503),
    ):
        assert load_holidays("https://example.com/holidays.ics") == {}


def test_missing_file_leaves_holidays_empty(tmp_path: Path) -> None:
    assert load_holidays(str(tmp_path / "missing.ics")) == {}


def test_no_source_configured() -> None:
    with TestClient(create_app()) as client:
        res = client.get("/holidays")

    assert res.json() == {"holidays": []}


def test_multi_day_holiday_is_recorded_at_start_date() -> None:
    text = (
        "BEGIN:VEVENT\r\n"
        "DTSTART;VALUE=DATE:20261229\r\n"
        "DTEND;VALUE=DATE:20270104\r\n"
        "SUMMARY:年末年始休暇\r\n"
        "END:VEVENT\r\n"
    )

    assert build_holiday_map(text) == {date(2026, 12, 29): "年末年始休暇"}


def test_list_holidays_sorted_and_filtered() -> None:
    holidays = {
        date(2027, 1, 1): "元日",
        date(2026, 5, 5): "こどもの日",
        date(2026, 1, 1): "元日",
    }

    assert list_holidays(holidays) == [
        (date(2026, 1, 1), "元日"),
        (date(2026, 5, 5), "こどもの日"),
        (date(2027, 1, 1), "元日"),
    ]
    assert list_holidays(holidays, year=2027) == [(date(2027, 1, 1), "元日")]
