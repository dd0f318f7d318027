"""予定を `.ics` として書き出すユースケース。"""

from __future__ import annotations

import re

from personal_calendar.core.logging import log_event
from personal_calendar.core.settings import Settings
from personal_calendar.core.store import EventStore
from personal_calendar.features.ics_export.schemas_ics_export import IcsDownload
from personal_calendar.ics import encode_event, encode_events

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_FALLBACK_FILENAME = "event"


def export_all_events(*, store: EventStore, settings: Settings) -> IcsDownload:
    """保存済みの全予定を 1 つのカレンダーにまとめる。"""

    records = store.list_events()
    content = encode_events(records)
    log_event("ics_exported", scope="all", event_count=len(records))
    return IcsDownload(
        content=content,
        filename=settings.export_filename,
        event_count=len(records),
    )


def export_single_event(event_id: str, *, store: EventStore) -> IcsDownload:
    """予定 1 件を、タイトルから作ったファイル名で書き出す。"""

    record = store.get(event_id)
    content = encode_event(record)
    log_event("ics_exported", scope="single", event_id=event_id)
    return IcsDownload(
        content=content,
        filename=f"{safe_filename(record.title)}.ics",
        event_count=1,
    )


def safe_filename(title: str | None) -> str:
    """英数字・`_`・`-` 以外を `_` に置き換えたファイル名の本体を返す。"""

    return _UNSAFE_FILENAME_CHARS.sub("_", title or _FALLBACK_FILENAME)
