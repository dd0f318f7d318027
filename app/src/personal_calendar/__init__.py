"""personal_calendar パッケージ。

`personal_calendar.ics` を設定や保存先に触れずに使えるよう、ここでは
アプリを組み立てない。ASGI アプリと Lambda ハンドラは `personal_calendar.main` にある。
"""

from .app import create_app

__all__ = ["create_app"]
