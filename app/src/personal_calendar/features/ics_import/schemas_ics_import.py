"""`/calendar/import` のレスポンススキーマ。"""

from __future__ import annotations

from pydantic import BaseModel, Field

from personal_calendar.shared.schemas.events import EventModel


class IcsImportResponse(BaseModel):
    """取り込んだ予定の件数と内容。"""

    imported: int
    events: list[EventModel] = Field(default_factory=list)
