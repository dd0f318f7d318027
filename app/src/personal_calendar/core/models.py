"""コーデックとイベントストアで共有するデータモデル。"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time

DEFAULT_EVENT_COLOR = "#4F46E5"


@dataclass(frozen=True, slots=True)
class EventRecord:
    """アプリ内で扱う予定 1 件分のレコード。

    `start_time` があれば時刻指定の予定、無ければ終日予定として扱う。
    `end_date` は終了日を含む（inclusive）。`None` の場合は `start_date` と同日。
    `color` / `is_holiday` はアプリ側のメタデータで、iCalendar には書き出さない。
    """

    id: str
    start_date: date
    title: str = ""
    end_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None
    description: str = ""
    color: str | None = None
    is_holiday: bool = False

    @property
    def is_all_day(self) -> bool:
        return self.start_time is None

    @property
    def effective_end_date(self) -> date:
        return self.end_date or self.start_date

    def covers(self, day: date) -> bool:
        """指定日が予定の日付範囲（両端含む）に入るか。"""

        return self.start_date <= day <= self.effective_end_date
