"""予定の作成・参照・更新・削除ユースケース。"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from personal_calendar.core.models import EventRecord
from personal_calendar.core.settings import Settings
from personal_calendar.core.store import EventStore
from personal_calendar.features.calendar_events.schemas_calendar_events import (
    EventCreateRequest,
    EventUpdateRequest,
)


def create_event(
    payload: EventCreateRequest,
    *,
    store: EventStore,
    settings: Settings,
) -> EventRecord:
    """新しい ID と既定色を割り当てて予定を保存する。"""

    record = EventRecord(
        id=str(uuid.uuid4()),
        title=payload.title,
        start_date=payload.start_date,
        end_date=payload.end_date or payload.start_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        description=payload.description,
        color=payload.color or settings.default_event_color,
    )
    validate_record(record)
    return store.add(record)


def list_events(*, store: EventStore, on: date | None = None) -> list[EventRecord]:
    if on is None:
        return store.list_events()
    return store.events_on(on)


def update_event(
    event_id: str,
    payload: EventUpdateRequest,
    *,
    store: EventStore,
) -> EventRecord:
    """指定されたフィールドだけを差し替える。"""

    changes: dict[str, Any] = payload.model_dump(exclude_unset=True)
    if "title" in changes and changes["title"] is None:
        changes["title"] = ""
    if "description" in changes and changes["description"] is None:
        changes["description"] = ""

    current = store.get(event_id)
    merged = _merge(current, changes)
    validate_record(merged)
    return store.update(
        event_id,
        **{name: getattr(merged, name) for name in changes},
    )


def delete_event(event_id: str, *, store: EventStore) -> None:
    store.delete(event_id)


def validate_record(record: EventRecord) -> None:
    """API 経由で作られる予定の整合性を確認する。"""

    if not record.title.strip():
        raise ValueError("タイトルは必須です。")
    if record.effective_end_date < record.start_date:
        raise ValueError("end_date は start_date 以降である必要があります。")
    if record.end_time is not None and record.start_time is None:
        raise ValueError("end_time を指定する場合は start_time も指定してください。")
    if (
        record.start_time is not None
        and record.end_time is not None
        and record.effective_end_date == record.start_date
        and record.end_time <= record.start_time
    ):
        raise ValueError("end_time は start_time より後である必要があります。")


def _merge(current: EventRecord, changes: dict[str, Any]) -> EventRecord:
    return EventRecord(
        id=current.id,
        title=changes.get("title", current.title),
        start_date=changes.get("start_date") or current.start_date,
        end_date=changes.get("end_date", current.end_date),
        start_time=changes.get("start_time", current.start_time),
        end_time=changes.get("end_time", current.end_time),
        description=changes.get("description", current.description),
        color=changes.get("color", current.color),
        is_holiday=current.is_holiday,
    )
