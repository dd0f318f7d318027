"""祝日フィードの読み込みユースケース。

起動時に一度だけ `.ics` を読み込み、日付から祝日名を引ける辞書にする。
取得に失敗しても起動は止めず、空の辞書で続行する。
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from personal_calendar.clients import http_client
from personal_calendar.core.logging import log_event
from personal_calendar.ics import DecodeOptions, decode_calendar

HolidayMap = dict[date, str]

_REMOTE_PREFIXES = ("http://", "https://")


def load_holidays(source: str | None) -> HolidayMap:
    """URL またはファイルパスの祝日フィードを読み込む。"""

    if not source:
        log_event("holiday_feed_skipped", reason="HOLIDAY_FEED_SOURCE is not set")
        return {}

    try:
        text = _read_source(source)
    except (http_client.HttpFetchError, OSError, UnicodeDecodeError) as exc:
        log_event(
            "holiday_feed_failed",
            level=logging.WARNING,
            source=source,
            error=str(exc),
        )
        return {}

    holidays = build_holiday_map(text)
    log_event("holiday_feed_loaded", source=source, holiday_count=len(holidays))
    return holidays


def build_holiday_map(text: str) -> HolidayMap:
    """複数日にまたがる祝日は開始日だけを登録する。"""

    records = decode_calendar(
        text,
        DecodeOptions(default_color=None, mark_as_holiday=True),
    )
    return {record.start_date: record.title for record in records}


def list_holidays(holidays: HolidayMap, *, year: int | None = None) -> list[tuple[date, str]]:
    return sorted(
        (day, name)
        for day, name in holidays.items()
        if year is None or day.year == year
    )


def _read_source(source: str) -> str:
    if source.startswith(_REMOTE_PREFIXES):
        return http_client.fetch_text(source)
    return Path(source).read_text(encoding="utf-8-sig")
