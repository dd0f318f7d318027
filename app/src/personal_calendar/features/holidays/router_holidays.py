"""祝日一覧のエンドポイント。"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from personal_calendar.features.holidays.schemas_holidays import (
    HolidayModel,
    HolidaysResponse,
)
from personal_calendar.features.holidays.usecase_holidays import HolidayMap, list_holidays

router = APIRouter(prefix="/holidays", tags=["holidays"])


async def get_holidays(request: Request) -> HolidayMap:
    return request.app.state.holidays  # type: ignore[attr-defined]


@router.get("", response_model=HolidaysResponse)
async def holidays_list(
    year: int | None = Query(None, ge=1, le=9999),
    holidays: HolidayMap = Depends(get_holidays),
) -> HolidaysResponse:
    return HolidaysResponse(
        holidays=[
            HolidayModel(day=day, name=name)
            for day, name in list_holidays(holidays, year=year)
        ]
    )
