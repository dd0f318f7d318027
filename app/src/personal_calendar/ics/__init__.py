"""iCalendar (RFC 5545) の書き出し・読み込みを行うコーデック。"""

from __future__ import annotations

from .decoder import DecodeOptions, decode_calendar
from .encoder import encode_event, encode_events

__all__ = ["DecodeOptions", "decode_calendar", "encode_event", "encode_events"]
