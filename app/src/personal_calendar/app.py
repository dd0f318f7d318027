"""FastAPI アプリケーションの組み立てを担当するモジュール。"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .core.middleware import request_id_middleware
from .core.settings import Settings, load_settings
from .core.store import EventStore
from .features.calendar_events.router_calendar_events import router as events_router
from .features.holidays.router_holidays import router as holidays_router
from .features.holidays.usecase_holidays import load_holidays
from .features.ics_export.router_ics_export import router as export_router
from .features.ics_import.router_ics_import import router as import_router


def create_app(*, store: EventStore | None = None) -> FastAPI:
    """コア設定や共通ミドルウェアを組み込んだ FastAPI アプリを返す。

    `store` を渡さなければ設定の `events_file` を使うストアを作る。
    """

    settings = load_settings()
    app = FastAPI(title="personal-calendar", version="0.1.0", lifespan=_lifespan)
    app.state.settings = settings  # type: ignore[attr-defined]
    app.state.store = store or EventStore(settings.events_file)  # type: ignore[attr-defined]
    app.state.holidays = {}  # type: ignore[attr-defined]
    app.middleware("http")(request_id_middleware)

    @app.get("/healthz", tags=["health"])
    def healthz() -> dict[str, str]:
        return {"status": "ok", "env": settings.app_env}

    app.include_router(events_router)
    app.include_router(export_router)
    app.include_router(import_router)
    app.include_router(holidays_router)

    return app


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    # 祝日フィードは起動時に一度だけ読み込む
    settings: Settings = app.state.settings  # type: ignore[attr-defined]
    app.state.holidays = load_holidays(settings.holiday_feed_source)  # type: ignore[attr-defined]
    yield
