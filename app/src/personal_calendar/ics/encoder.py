"""予定レコードを iCalendar (RFC 5545) テキストへ変換するエンコーダ。

時刻指定の予定はタイムゾーン無しのローカル日時で書き出す（VTIMEZONE は扱わない）。
終日予定は `VALUE=DATE` を使い、DTEND は最終日の翌日（排他的終端）とする。
"""

from __future__ import annotations

from datetime import datetime, time, timezone
from typing import Iterable

from personal_calendar.core.models import EventRecord
from personal_calendar.ics.text import (
    CRLF,
    escape_text,
    fold_line,
    format_date,
    format_local_datetime,
    next_day,
)

PRODID = "-//PersonalCalendar//JA"
UID_DOMAIN = "personal-calendar"
DEFAULT_DURATION_HOURS = 1

_CALENDAR_HEADER = (
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    f"PRODID:{PRODID}",
    "CALSCALE:GREGORIAN",
    "METHOD:PUBLISH",
)
_CALENDAR_FOOTER = ("END:VCALENDAR",)


def encode_events(records: Iterable[EventRecord], *, stamp: datetime | None = None) -> str:
    """複数の予定を 1 つの VCALENDAR 文書にまとめる。

    Args:
        records: 書き出す予定。順序はそのまま VEVENT の並びになる。
        stamp: DTSTAMP に使う時刻。省略時は現在の UTC 時刻。

    Returns:
        CRLF 区切りで末尾にも CRLF を持つ iCalendar テキスト。
    """

    stamp = stamp or datetime.now(timezone.utc)
    lines: list[str] = list(_CALENDAR_HEADER)
    for record in records:
        lines.extend(event_to_vevent(record, stamp=stamp))
    lines.extend(_CALENDAR_FOOTER)
    return CRLF.join(fold_line(line) for line in lines) + CRLF


def encode_event(record: EventRecord, *, stamp: datetime | None = None) -> str:
    """予定 1 件だけを含む VCALENDAR 文書を返す。"""

    return encode_events([record], stamp=stamp)


def event_to_vevent(record: EventRecord, *, stamp: datetime) -> list[str]:
    """予定 1 件を VEVENT ブロックの行リスト（折り返し前）に変換する。"""

    lines = [
        "BEGIN:VEVENT",
        f"UID:{make_uid(record)}",
        f"DTSTAMP:{_format_stamp(stamp)}",
    ]
    lines.extend(_boundary_lines(record))
    lines.append(f"SUMMARY:{escape_text(record.title)}")
    if record.description:
        lines.append(f"DESCRIPTION:{escape_text(record.description)}")
    lines.append("END:VEVENT")
    return lines


def make_uid(record: EventRecord) -> str:
    return f"{record.id}@{UID_DOMAIN}"


def _boundary_lines(record: EventRecord) -> list[str]:
    if record.start_time is None:
        # 終日予定の DTEND は排他的なので最終日の翌日を指す。
        return [
            f"DTSTART;VALUE=DATE:{format_date(record.start_date)}",
            f"DTEND;VALUE=DATE:{format_date(next_day(record.effective_end_date))}",
        ]

    start = format_local_datetime(record.start_date, record.start_time)
    if record.end_time is not None:
        end = format_local_datetime(record.effective_end_date, record.end_time)
    else:
        end = format_local_datetime(record.start_date, _default_end_time(record.start_time))
    return [f"DTSTART:{start}", f"DTEND:{end}"]


def _default_end_time(start: time) -> time:
    # 日付は繰り上げず、時だけを 24 で折り返す。
    return start.replace(hour=(start.hour + DEFAULT_DURATION_HOURS) % 24)


def _format_stamp(stamp: datetime) -> str:
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone(timezone.utc)
    return f"{format_date(stamp.date())}T000000Z"
