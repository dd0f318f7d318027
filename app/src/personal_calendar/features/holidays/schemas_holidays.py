"""`/holidays` のレスポンススキーマ。"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class HolidayModel(BaseModel):
    day: date
    name: str


class HolidaysResponse(BaseModel):
    holidays: list[HolidayModel] = Field(default_factory=list)
