"""iCalendar のテキスト処理と日付計算の共通ヘルパー。"""

from __future__ import annotations

import re
from datetime import date, time, timedelta

CRLF = "\r\n"
MAX_LINE_OCTETS = 75

_FOLDED_BREAK = re.compile(r"\r?\n[ \t]")
_UNESCAPES = {
    "n": "\n",
    "N": "\n",
    ",": ",",
    ";": ";",
    "\\": "\\",
}


def escape_text(text: str | None) -> str:
    """TEXT 値をエスケープする（RFC 5545 §3.3.11）。

    バックスラッシュを最初に置換しないと、後段で追加したものまで二重に
    エスケープされる。CRLF と単独の CR は LF とみなすので、出力に生の CR は残らない。
    """

    if not text:
        return ""
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\n", "\\n")
    )


def unescape_text(text: str | None) -> str:
    """`escape_text` の逆変換。

    置換を連鎖させると `\\\\n` のような並びを二重に解釈してしまうため、
    先頭から 1 文字ずつ読み、エスケープは 2 文字単位で消費する。
    未知のエスケープはそのまま残す。
    """

    if not text:
        return ""

    chars: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\" and index + 1 < length:
            replacement = _UNESCAPES.get(text[index + 1])
            if replacement is not None:
                chars.append(replacement)
                index += 2
                continue
        chars.append(char)
        index += 1
    return "".join(chars)


def fold_line(line: str) -> str:
    """75 オクテットを超える行を折り返す（RFC 5545 §3.1）。

    継続行は半角スペース 1 つで始まり、その分も 75 オクテットに含める。
    UTF-8 の多バイト文字は途中で分割しない。
    """

    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    fragments: list[str] = []
    current = ""
    size = 0
    for char in line:
        width = len(char.encode("utf-8"))
        if size + width > MAX_LINE_OCTETS:
            fragments.append(current)
            current = " "
            size = 1
        current += char
        size += width
    fragments.append(current)
    return CRLF.join(fragments)


def unfold(raw: str) -> str:
    """折り返された継続行を元の 1 行に戻す。"""

    return _FOLDED_BREAK.sub("", raw)


def next_day(value: date) -> date:
    return value + timedelta(days=1)


def previous_day(value: date) -> date:
    return value - timedelta(days=1)


def format_date(value: date) -> str:
    """`date` を `YYYYMMDD` 形式にする。"""

    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def format_local_datetime(day: date, at: time) -> str:
    """日付と時刻をタイムゾーン無しのローカル日時 `YYYYMMDDTHHMM00` にする。"""

    return f"{format_date(day)}T{at.hour:02d}{at.minute:02d}00"
