"""予定の CRUD エンドポイント。"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from personal_calendar.core.settings import Settings
from personal_calendar.core.store import EventNotFoundError, EventStore
from personal_calendar.features.calendar_events.schemas_calendar_events import (
    ErrorModel,
    EventCreateRequest,
    EventModel,
    EventsResponse,
    EventUpdateRequest,
)
from personal_calendar.features.calendar_events.usecase_calendar_events import (
    create_event,
    delete_event,
    list_events,
    update_event,
)

router = APIRouter(prefix="/calendar", tags=["calendar"])


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


async def get_store(request: Request) -> EventStore:
    return request.app.state.store  # type: ignore[attr-defined]


def _not_found(exc: EventNotFoundError) -> HTTPException:
    error = ErrorModel(code="EVENT_NOT_FOUND", message=str(exc), retryable=False)
    return HTTPException(status_code=404, detail={"error": error.model_dump()})


def _invalid(exc: ValueError) -> HTTPException:
    error = ErrorModel(code="INVALID_EVENT", message=str(exc), retryable=False)
    return HTTPException(status_code=400, detail={"error": error.model_dump()})


@router.post("/events", response_model=EventModel, status_code=201)
async def calendar_events_create(
    payload: EventCreateRequest,
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EventModel:
    try:
        record = create_event(payload, store=store, settings=settings)
    except ValueError as exc:
        raise _invalid(exc) from exc
    return EventModel.from_record(record)


@router.get("/events", response_model=EventsResponse)
async def calendar_events_list(
    on: date | None = Query(None, description="この日を含む予定だけを返す"),
    store: EventStore = Depends(get_store),
) -> EventsResponse:
    records = list_events(store=store, on=on)
    return EventsResponse(events=[EventModel.from_record(record) for record in records])


@router.get("/events/{event_id}", response_model=EventModel)
async def calendar_events_get(
    event_id: str,
    store: EventStore = Depends(get_store),
) -> EventModel:
    try:
        record = store.get(event_id)
    except EventNotFoundError as exc:
        raise _not_found(exc) from exc
    return EventModel.from_record(record)


@router.patch("/events/{event_id}", response_model=EventModel)
async def calendar_events_update(
    event_id: str,
    payload: EventUpdateRequest,
    store: EventStore = Depends(get_store),
) -> EventModel:
    try:
        record = update_event(event_id, payload, store=store)
    except EventNotFoundError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise _invalid(exc) from exc
    return EventModel.from_record(record)


@router.delete("/events/{event_id}", status_code=204)
async def calendar_events_delete(
    event_id: str,
    store: EventStore = Depends(get_store),
) -> Response:
    try:
        delete_event(event_id, store=store)
    except EventNotFoundError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=204)
