"""予定レコードを保持するイベントストア。

メモリ上に保持し、`EVENTS_FILE` が設定されていれば変更のたびに JSON へ書き出す。
"""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
from datetime import date, time
from pathlib import Path
from typing import Any, Iterable

from personal_calendar.core.logging import log_event
from personal_calendar.core.models import EventRecord


class EventNotFoundError(KeyError):
    """指定 ID の予定が存在しない。"""

    def __init__(self, event_id: str) -> None:
        super().__init__(event_id)
        self.event_id = event_id

    def __str__(self) -> str:
        return f"予定が見つかりません: {self.event_id}"


class EventStore:
    """ID をキーに予定を保持するスレッドセーフなストア。"""

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else None
        self._lock = threading.RLock()
        self._records: dict[str, EventRecord] = {}
        if self._path is not None:
            self._records = {record.id: record for record in _load_file(self._path)}

    def list_events(self) -> list[EventRecord]:
        with self._lock:
            return list(self._records.values())

    def get(self, event_id: str) -> EventRecord:
        with self._lock:
            try:
                return self._records[event_id]
            except KeyError:
                raise EventNotFoundError(event_id) from None

    def add(self, record: EventRecord) -> EventRecord:
        return self.add_many([record])[0]

    def add_many(self, records: Iterable[EventRecord]) -> list[EventRecord]:
        added = list(records)
        with self._lock:
            for record in added:
                self._records[record.id] = record
            self._save()
        return added

    def update(self, event_id: str, **changes: Any) -> EventRecord:
        """指定フィールドだけを差し替えた新しいレコードで置き換える。"""

        with self._lock:
            current = self.get(event_id)
            changes.pop("id", None)
            updated = dataclasses.replace(current, **changes)
            self._records[event_id] = updated
            self._save()
            return updated

    def delete(self, event_id: str) -> None:
        with self._lock:
            if self._records.pop(event_id, None) is None:
                raise EventNotFoundError(event_id)
            self._save()

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._save()

    def events_on(self, day: date) -> list[EventRecord]:
        """指定日を日付範囲に含む予定を返す。"""

        return [record for record in self.list_events() if record.covers(day)]

    def _save(self) -> None:
        if self._path is None:
            return
        payload = [record_to_dict(record) for record in self._records.values()]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            log_event(
                "store_save_failed",
                level=logging.ERROR,
                path=str(self._path),
                error=str(exc),
            )


def record_to_dict(record: EventRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "title": record.title,
        "start_date": record.start_date.isoformat(),
        "end_date": record.end_date.isoformat() if record.end_date else None,
        "start_time": _format_time(record.start_time),
        "end_time": _format_time(record.end_time),
        "description": record.description,
        "color": record.color,
        "is_holiday": record.is_holiday,
    }


def record_from_dict(data: dict[str, Any]) -> EventRecord:
    end_date = data.get("end_date")
    return EventRecord(
        id=str(data["id"]),
        title=data.get("title") or "",
        start_date=date.fromisoformat(data["start_date"]),
        end_date=date.fromisoformat(end_date) if end_date else None,
        start_time=_parse_time(data.get("start_time")),
        end_time=_parse_time(data.get("end_time")),
        description=data.get("description") or "",
        color=data.get("color"),
        is_holiday=bool(data.get("is_holiday", False)),
    )


def _load_file(path: Path) -> list[EventRecord]:
    if not path.exists():
        return []
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError("予定ファイルは JSON 配列である必要があります。")
        return [record_from_dict(item) for item in raw]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        log_event(
            "store_load_failed",
            level=logging.WARNING,
            path=str(path),
            error=str(exc),
        )
        return []


def _format_time(value: time | None) -> str | None:
    return value.strftime("%H:%M") if value is not None else None


def _parse_time(value: str | None) -> time | None:
    return time.fromisoformat(value) if value else None
