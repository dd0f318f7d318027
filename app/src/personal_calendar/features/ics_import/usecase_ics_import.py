"""アップロードされた `.ics` を取り込むユースケース。"""

from __future__ import annotations

from personal_calendar.core.logging import log_event
from personal_calendar.core.models import EventRecord
from personal_calendar.core.settings import Settings
from personal_calendar.core.store import EventStore
from personal_calendar.ics import DecodeOptions, decode_calendar
from personal_calendar.ics.decoder import IdFactory


class ImportTooLargeError(ValueError):
    """アップロードが許容サイズを超えている。"""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"ファイルサイズが上限を超えています ({size} > {limit} bytes)")
        self.size = size
        self.limit = limit


def import_calendar(
    raw: bytes,
    *,
    store: EventStore,
    settings: Settings,
    id_factory: IdFactory | None = None,
) -> list[EventRecord]:
    """`.ics` の中身を解析し、取り出せた予定をすべて保存する。

    Raises:
        ImportTooLargeError: `max_import_bytes` を超えている場合。
        ValueError: UTF-8 として読めない場合。
    """

    if len(raw) > settings.max_import_bytes:
        raise ImportTooLargeError(len(raw), settings.max_import_bytes)

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValueError("UTF-8 の iCalendar ファイルを指定してください。") from exc

    records = decode_calendar(
        text,
        DecodeOptions(default_color=settings.default_event_color),
        id_factory=id_factory,
    )
    store.add_many(records)
    log_event("ics_imported", size_bytes=len(raw), event_count=len(records))
    return records
