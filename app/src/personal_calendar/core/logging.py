"""JSONロギングの共通ヘルパー。

ログは 1 行 1 JSON で `personal_calendar` ロガーへ出す。
"""

from __future__ import annotations

import json
import logging
import traceback
from typing import Any

_LOGGER = logging.getLogger("personal_calendar")


def log_request(
    *,
    method: str,
    path: str,
    status: int,
    request_id: str,
    latency_ms: int,
) -> None:
    _emit(
        logging.INFO,
        {
            "method": method,
            "path": path,
            "status": status,
            "request_id": request_id,
            "latency_ms": latency_ms,
        },
    )


def log_error(
    *,
    method: str,
    path: str,
    status: int,
    request_id: str,
    latency_ms: int,
    error: Any,
) -> None:
    _emit(
        logging.ERROR,
        {
            "method": method,
            "path": path,
            "status": status,
            "request_id": request_id,
            "latency_ms": latency_ms,
            "error_json": _to_error_json(error),
            "traceback": traceback.format_exc(),
        },
    )


def log_event(event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    """取り込み・書き出し・祝日読み込みなどの出来事を記録する。"""

    _emit(level, {"event": event, **fields})


def _emit(level: int, payload: dict[str, Any]) -> None:
    record = {"level": logging.getLevelName(level), **payload}
    _LOGGER.log(level, json.dumps(record, ensure_ascii=False, default=str))


def _to_error_json(error: Any) -> str:
    if isinstance(error, (dict, list)):
        return json.dumps(error, ensure_ascii=False)
    return json.dumps({"message": str(error)}, ensure_ascii=False)
