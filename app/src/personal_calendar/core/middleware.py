"""FastAPI 用の共通ミドルウェア。"""

from __future__ import annotations

import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.responses import JSONResponse

from personal_calendar.core.logging import log_error, log_request

RequestHandler = Callable[[Request], Awaitable[Response]]

_UNEXPECTED_ERROR = {
    "code": "UNEXPECTED_ERROR",
    "message": "予期しないエラーが発生しました。",
    "retryable": False,
}


async def request_id_middleware(request: Request, call_next: RequestHandler) -> Response:
    """X-Request-Id を受理・生成してレスポンスに付け、結果を 1 行ログに残す。

    ルータで捕捉されなかった例外はここで 500 の JSON に変換する。
    """

    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    request.state.request_id = request_id
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception as exc:
        log_error(
            method=request.method,
            path=request.url.path,
            status=500,
            request_id=request_id,
            latency_ms=_elapsed_ms(started),
            error=exc,
        )
        response = JSONResponse({"detail": {"error": _UNEXPECTED_ERROR}}, status_code=500)

    latency_ms = _elapsed_ms(started)
    response.headers["X-Request-Id"] = request_id
    response.headers["X-Response-Time-Ms"] = str(latency_ms)
    log_request(
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        request_id=request_id,
        latency_ms=latency_ms,
    )
    return response


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
