"""`.ics` アップロードのエンドポイント。"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from personal_calendar.core.settings import Settings
from personal_calendar.core.store import EventStore
from personal_calendar.features.ics_import.schemas_ics_import import IcsImportResponse
from personal_calendar.features.ics_import.usecase_ics_import import (
    ImportTooLargeError,
    import_calendar,
)
from personal_calendar.shared.schemas.events import ErrorModel, EventModel

router = APIRouter(prefix="/calendar", tags=["ics"])


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


async def get_store(request: Request) -> EventStore:
    return request.app.state.store  # type: ignore[attr-defined]


@router.post(
    "/import",
    response_model=IcsImportResponse,
    responses={400: {"model": ErrorModel}, 413: {"model": ErrorModel}},
)
async def ics_import(
    file: UploadFile = File(..., description="取り込む .ics ファイル"),
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> IcsImportResponse:
    # 上限 + 1 バイトまで読めば超過は判定できる
    raw = await file.read(settings.max_import_bytes + 1)
    try:
        records = import_calendar(raw, store=store, settings=settings)
    except ImportTooLargeError as exc:
        error = ErrorModel(code="FILE_TOO_LARGE", message=str(exc), retryable=False)
        raise HTTPException(status_code=413, detail={"error": error.model_dump()}) from exc
    except ValueError as exc:
        error = ErrorModel(code="INVALID_FILE", message=str(exc), retryable=False)
        raise HTTPException(status_code=400, detail={"error": error.model_dump()}) from exc
    return IcsImportResponse(
        imported=len(records),
        events=[EventModel.from_record(record) for record in records],
    )
