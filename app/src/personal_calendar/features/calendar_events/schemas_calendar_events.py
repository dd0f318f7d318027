"""`/calendar/events` のリクエスト/レスポンススキーマ。"""

from __future__ import annotations

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field, field_validator

from personal_calendar.shared.schemas.events import ErrorModel, EventModel


class EventCreateRequest(BaseModel):
    """予定の新規作成リクエスト。"""

    title: str = Field(..., description="予定のタイトル（必須）")
    start_date: date = Field(..., description="開始日（YYYY-MM-DD）")
    end_date: date | None = Field(None, description="最終日（含む）。省略時は開始日")
    start_time: time | None = Field(None, description="開始時刻（HH:MM）。省略時は終日予定")
    end_time: time | None = Field(None, description="終了時刻（HH:MM）")
    description: str = ""
    color: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("タイトルは必須です。")
        return value


class EventUpdateRequest(BaseModel):
    """予定の部分更新リクエスト。指定したフィールドだけを上書きする。"""

    title: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None
    description: str | None = None
    color: str | None = None

    model_config = ConfigDict(extra="forbid")


class EventsResponse(BaseModel):
    events: list[EventModel] = Field(default_factory=list)


__all__ = [
    "ErrorModel",
    "EventCreateRequest",
    "EventModel",
    "EventUpdateRequest",
    "EventsResponse",
]
