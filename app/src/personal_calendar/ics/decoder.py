"""iCalendar (RFC 5545) テキストを予定レコードへ変換するデコーダ。

アプリが扱う DTSTART / DTEND / SUMMARY / DESCRIPTION だけを取り出し、
それ以外のプロパティや解釈できない値は黙って読み飛ばす。
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import date, time
from typing import Callable, NamedTuple

from personal_calendar.core.models import DEFAULT_EVENT_COLOR, EventRecord
from personal_calendar.ics.text import previous_day, unescape_text, unfold

IMPORTED_TITLE_PLACEHOLDER = "インポートした予定"

IdFactory = Callable[[], str]

_LINE_BREAK = re.compile(r"\r?\n")
_KNOWN_PROPERTIES = frozenset({"DTSTART", "DTEND", "SUMMARY", "DESCRIPTION"})


@dataclass(frozen=True, slots=True)
class DecodeOptions:
    """デコード結果に付与するアプリ側のメタデータ。"""

    default_color: str | None = DEFAULT_EVENT_COLOR
    mark_as_holiday: bool = False


class Boundary(NamedTuple):
    """DTSTART / DTEND を解釈した結果。解釈できなければ両方 None。"""

    day: date | None
    at: time | None


_UNSET = Boundary(None, None)


def decode_calendar(
    text: str | None,
    options: DecodeOptions | None = None,
    *,
    id_factory: IdFactory | None = None,
) -> list[EventRecord]:
    """iCalendar テキストから予定レコードを取り出す。

    Args:
        text: `.ics` ファイル全体の文字列。
        options: 取り込んだ予定に付ける色・祝日フラグ。
        id_factory: 新しい予定 ID の生成関数。省略時は UUID4。
            元データの UID は ID として再利用しない。

    Returns:
        DTSTART を解釈できた VEVENT ごとに 1 件、出現順に並べたリスト。
        空文字列や壊れた入力では空リストを返し、例外は送出しない。
    """

    if not text:
        return []

    options = options or DecodeOptions()
    new_id = id_factory or _uuid4_str

    records: list[EventRecord] = []
    properties: dict[str, str] | None = None
    # VEVENT 内の VALARM などネストしたコンポーネントの深さ
    nested = 0

    for raw_line in _LINE_BREAK.split(unfold(text)):
        line = raw_line.strip()
        upper = line.upper()

        if upper == "BEGIN:VEVENT":
            properties = {}
            nested = 0
            continue
        if properties is None:
            continue
        if upper == "END:VEVENT":
            record = _build_record(properties, options, new_id)
            if record is not None:
                records.append(record)
            properties = None
            continue
        if upper.startswith("BEGIN:"):
            nested += 1
            continue
        if upper.startswith("END:"):
            nested = max(nested - 1, 0)
            continue
        if nested:
            continue

        # 値の末尾の空白は SUMMARY などの一部なので残す
        name, separator, value = raw_line.lstrip().partition(":")
        if not separator:
            continue
        base_name = name.split(";", 1)[0].upper()
        if base_name in _KNOWN_PROPERTIES:
            properties[base_name] = value

    return records


def parse_boundary(value: str | None) -> Boundary:
    """DTSTART / DTEND の値を日付と時刻に分解する。

    - `YYYYMMDD` は日付のみ
    - `YYYYMMDDTHHMMSS` は日付と時刻（秒は捨てる）
    - 末尾の `Z` は取り除くだけでタイムゾーン変換はしない
    それ以外の形や存在しない日付は未設定として扱う。
    """

    if not value:
        return _UNSET
    clean = value.strip()
    if clean.endswith("Z"):
        clean = clean[:-1]

    if len(clean) == 8:
        parsed_date = _parse_date(clean)
        return Boundary(parsed_date, None) if parsed_date is not None else _UNSET

    if len(clean) >= 15 and "T" in clean:
        parsed_date = _parse_date(clean[:8])
        parsed_time = _parse_time(clean[9:13])
        if parsed_date is not None and parsed_time is not None:
            return Boundary(parsed_date, parsed_time)

    return _UNSET


def _build_record(
    properties: dict[str, str],
    options: DecodeOptions,
    new_id: IdFactory,
) -> EventRecord | None:
    start = parse_boundary(properties.get("DTSTART"))
    if start.day is None:
        return None

    end = parse_boundary(properties["DTEND"]) if "DTEND" in properties else _UNSET
    end_date = end.day
    if start.at is None and end_date is not None and end_date != start.day:
        # 終日予定の DTEND は排他的なので 1 日戻して最終日にする。
        end_date = previous_day(end_date)
    if end_date is None or end_date < start.day:
        end_date = start.day

    end_time = end.at if start.at is not None else None

    return EventRecord(
        id=new_id(),
        title=unescape_text(properties.get("SUMMARY")) or IMPORTED_TITLE_PLACEHOLDER,
        start_date=start.day,
        end_date=end_date,
        start_time=start.at,
        end_time=end_time,
        description=unescape_text(properties.get("DESCRIPTION")),
        color=options.default_color,
        is_holiday=options.mark_as_holiday,
    )


def _parse_date(value: str) -> date | None:
    if len(value) != 8 or not value.isdigit():
        return None
    try:
        return date(int(value[:4]), int(value[4:6]), int(value[6:8]))
    except ValueError:
        return None


def _parse_time(value: str) -> time | None:
    if len(value) != 4 or not value.isdigit():
        return None
    try:
        return time(int(value[:2]), int(value[2:4]))
    except ValueError:
        return None


def _uuid4_str() -> str:
    return str(uuid.uuid4())
