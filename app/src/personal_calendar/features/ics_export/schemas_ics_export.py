"""`.ics` 書き出し結果の受け渡し用モデル。"""

from __future__ import annotations

from dataclasses import dataclass

ICS_MEDIA_TYPE = "text/calendar; charset=utf-8"


@dataclass(slots=True)
class IcsDownload:
    """ダウンロードさせる `.ics` の本文とファイル名。"""

    content: str
    filename: str
    event_count: int

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Disposition": f'attachment; filename="{self.filename}"'}
