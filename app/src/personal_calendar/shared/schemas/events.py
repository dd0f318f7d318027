"""API で受け渡す予定のスキーマ。"""

from __future__ import annotations

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field

from personal_calendar.core.models import EventRecord


class ErrorModel(BaseModel):
    """共通エラーモデル。"""

    code: str
    message: str
    retryable: bool


class EventModel(BaseModel):
    """保存済みの予定。`end_date` は最終日を含む。"""

    id: str
    title: str
    start_date: date
    end_date: date
    start_time: time | None = None
    end_time: time | None = None
    description: str = ""
    color: str | None = None
    is_holiday: bool = False
    all_day: bool = Field(..., description="開始時刻が無ければ終日予定")

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_record(cls, record: EventRecord) -> "EventModel":
        return cls(
            id=record.id,
            title=record.title,
            start_date=record.start_date,
            end_date=record.effective_end_date,
            start_time=record.start_time,
            end_time=record.end_time,
            description=record.description,
            color=record.color,
            is_holiday=record.is_holiday,
            all_day=record.is_all_day,
        )
