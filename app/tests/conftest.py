from __future__ import annotations

from typing import Iterator

import pytest

from personal_calendar.core import settings as core_settings

_SETTINGS_ENV = (
    "APP_ENV",
    "REGION",
    "HOLIDAY_FEED_SOURCE",
    "DEFAULT_EVENT_COLOR",
    "EVENTS_FILE",
    "EXPORT_FILENAME",
    "MAX_IMPORT_BYTES",
    "SSM_PATH_PREFIX",
)


@pytest.fixture(autouse=True)
def basic_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """設定に影響する環境変数を初期化し、設定キャッシュを消す。"""

    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    core_settings.load_settings.cache_clear()
    yield
    core_settings.load_settings.cache_clear()
