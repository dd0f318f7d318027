"""アプリ全体で共有する設定読み込みロジック。"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

import boto3
from botocore.exceptions import ClientError

from personal_calendar.core.models import DEFAULT_EVENT_COLOR

_DEFAULT_REGION = "ap-northeast-1"
_DEFAULT_EXPORT_FILENAME = "calendar_events.ics"
_DEFAULT_MAX_IMPORT_BYTES = 1024 * 1024
_LOCAL_ENV = "local"


@dataclass(slots=True)
class Settings:
    """環境非依存で参照できる設定値の集合。"""

    app_env: str
    region: str
    holiday_feed_source: str | None
    default_event_color: str
    events_file: str | None
    export_filename: str
    max_import_bytes: int
    ssm_path_prefix: str | None = None

    @property
    def is_local(self) -> bool:
        return self.app_env == _LOCAL_ENV


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} は整数で指定してください: {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} は正の整数で指定してください: {value}")
    return value


def _fetch_ssm_parameters(
    region: str,
    names: Iterable[str],
    prefix: str,
    optional_names: Iterable[str] = (),
) -> dict[str, str]:
    """SSM から値を取得する。`optional_names` は存在しなくてもよい。"""

    required = [f"{prefix}/{name}" for name in names]
    optional = [f"{prefix}/{name}" for name in optional_names]
    client = boto3.client("ssm", region_name=region)
    try:
        resp = client.get_parameters(Names=required + optional, WithDecryption=True)
    except ClientError as exc:  # pragma: no cover - boto3 例外ラップ
        raise RuntimeError("SSM パラメータ取得に失敗しました。") from exc

    found = {item["Name"]: item["Value"] for item in resp.get("Parameters", [])}
    missing = {name for name in required if name not in found}
    if missing:
        raise ValueError(f"SSM パラメータ未設定: {', '.join(sorted(missing))}")
    return found


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """環境に応じて環境変数または SSM から設定を構築する。"""

    app_env = os.getenv("APP_ENV", _LOCAL_ENV)
    region = os.getenv("REGION", _DEFAULT_REGION)
    export_filename = os.getenv("EXPORT_FILENAME") or _DEFAULT_EXPORT_FILENAME

    if app_env == _LOCAL_ENV:
        return Settings(
            app_env=app_env,
            region=region,
            holiday_feed_source=os.getenv("HOLIDAY_FEED_SOURCE") or None,
            default_event_color=os.getenv("DEFAULT_EVENT_COLOR") or DEFAULT_EVENT_COLOR,
            events_file=os.getenv("EVENTS_FILE") or None,
            export_filename=export_filename,
            max_import_bytes=_parse_int(
                "MAX_IMPORT_BYTES",
                os.getenv("MAX_IMPORT_BYTES"),
                _DEFAULT_MAX_IMPORT_BYTES,
            ),
            ssm_path_prefix=None,
        )

    prefix = os.getenv("SSM_PATH_PREFIX", "/app/prod")
    required_keys = [
        "calendar/default_event_color",
        "calendar/max_import_bytes",
    ]
    # SSM は空文字を保持できないため、祝日フィードと保存先は未登録を「なし」とする
    optional_keys = [
        "calendar/holiday_feed_source",
        "calendar/events_file",
    ]
    values = _fetch_ssm_parameters(
        region=region,
        names=required_keys,
        prefix=prefix,
        optional_names=optional_keys,
    )

    def from_ssm(key: str, fallback_env: str | None = None) -> str | None:
        value = values.get(f"{prefix}/{key}")
        if value is None and fallback_env is not None:
            value = os.getenv(fallback_env)
        return value

    return Settings(
        app_env=app_env,
        region=region,
        holiday_feed_source=from_ssm("calendar/holiday_feed_source", "HOLIDAY_FEED_SOURCE") or None,
        default_event_color=from_ssm("calendar/default_event_color") or DEFAULT_EVENT_COLOR,
        events_file=from_ssm("calendar/events_file", "EVENTS_FILE") or None,
        export_filename=export_filename,
        max_import_bytes=_parse_int(
            "calendar/max_import_bytes",
            from_ssm("calendar/max_import_bytes"),
            _DEFAULT_MAX_IMPORT_BYTES,
        ),
        ssm_path_prefix=prefix,
    )
