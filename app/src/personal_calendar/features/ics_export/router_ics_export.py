"""`.ics` ダウンロードのエンドポイント。"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from personal_calendar.core.settings import Settings
from personal_calendar.core.store import EventNotFoundError, EventStore
from personal_calendar.features.ics_export.schemas_ics_export import (
    ICS_MEDIA_TYPE,
    IcsDownload,
)
from personal_calendar.features.ics_export.usecase_ics_export import (
    export_all_events,
    export_single_event,
)
from personal_calendar.shared.schemas.events import ErrorModel

router = APIRouter(prefix="/calendar", tags=["ics"])


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


async def get_store(request: Request) -> EventStore:
    return request.app.state.store  # type: ignore[attr-defined]


def _to_response(download: IcsDownload) -> Response:
    return Response(
        content=download.content,
        media_type=ICS_MEDIA_TYPE,
        headers=download.headers,
    )


@router.get("/export.ics", response_class=Response)
async def ics_export_all(
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> Response:
    return _to_response(export_all_events(store=store, settings=settings))


@router.get("/events/{event_id}/export.ics", response_class=Response)
async def ics_export_single(
    event_id: str,
    store: EventStore = Depends(get_store),
) -> Response:
    try:
        download = export_single_event(event_id, store=store)
    except EventNotFoundError as exc:
        error = ErrorModel(code="EVENT_NOT_FOUND", message=str(exc), retryable=False)
        raise HTTPException(status_code=404, detail={"error": error.model_dump()}) from exc
    return _to_response(download)
