"""httpx クライアントの共通設定と、テキスト取得のヘルパー。"""

from __future__ import annotations

import httpx

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class HttpFetchError(RuntimeError):
    """リモートからの取得に失敗したことを表す例外。"""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def create_sync_client(*, timeout: httpx.Timeout | None = None) -> httpx.Client:
    """共通タイムアウト付きの同期 Client を生成する。"""

    return httpx.Client(timeout=timeout or DEFAULT_TIMEOUT, follow_redirects=True)


def fetch_text(url: str, *, timeout: httpx.Timeout | None = None) -> str:
    """URL の本文を UTF-8 文字列として取得する。"""

    try:
        with create_sync_client(timeout=timeout) as client:
            response = client.get(url)
    except httpx.HTTPError as exc:
        raise HttpFetchError(f"{url} の取得に失敗しました: {exc}") from exc

    if response.status_code != 200:
        raise HttpFetchError(
            f"{url} の取得に失敗しました (Status: {response.status_code})",
            response.status_code,
        )
    return response.content.decode("utf-8-sig")
