from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Iterator

from .timecode import InvalidTimeFormat, decode

PLACEHOLDER = "[--:--]"

_MARK_RE = re.compile(r"\[\d+:\d+\.\d+\]")


class TokenKind(Enum):
    TEXT = "text"
    TIME_TAG = "time_tag"
    PLACEHOLDER = "placeholder"
    STRAY_CLOSE = "stray_close"
    LINE_BREAK = "line_break"


class TagFault(Enum):
    UNTERMINATED = "unterminated"
    INVALID_CHAR = "invalid_char"
    INVALID_TIME = "invalid_time"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    start: int
    end: int
    text: str
    value: int | None = None
    fault: TagFault | None = None
    fault_at: int | None = None  # column of the offending character

    @property
    def content(self) -> str:
        """Text between the brackets of a closed tag."""
        if self.kind is TokenKind.TIME_TAG and self.fault in (None, TagFault.INVALID_TIME):
            return self.text[1:-1]
        return self.text


def split_lines(text: str) -> list[str]:
    """
    Split on "\\n" only. A trailing newline terminates the last line
    instead of opening an empty one.
    """
    if not text:
        return []
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def _scan_tag(line: str, start: int) -> Token:
    j = start + 1
    while j < len(line):
        ch = line[j]
        if ch == "]":
            raw = line[start : j + 1]
            try:
                return Token(TokenKind.TIME_TAG, start, j + 1, raw, value=decode(raw[1:-1]))
            except InvalidTimeFormat:
                return Token(TokenKind.TIME_TAG, start, j + 1, raw, fault=TagFault.INVALID_TIME)
        if not (ch.isdecimal() or ch in ":."):
            # the broken tag swallows the rest of the line
            return Token(
                TokenKind.TIME_TAG, start, len(line), line[start:], fault=TagFault.INVALID_CHAR, fault_at=j
            )
        j += 1
    return Token(
        TokenKind.TIME_TAG,
        start,
        len(line),
        line[start:],
        fault=TagFault.UNTERMINATED,
        fault_at=len(line) - 1,
    )


def tokenize_line(line: str) -> Iterator[Token]:
    """
    Lazy scan of a single line. Malformed tags are flagged via Token.fault,
    never raised. Call again to restart.
    """
    n = len(line)
    i = 0
    text_start = 0
    while i < n:
        ch = line[i]
        if ch != "[" and ch != "]":
            i += 1
            continue

        if i > text_start:
            yield Token(TokenKind.TEXT, text_start, i, line[text_start:i])

        if ch == "]":
            yield Token(TokenKind.STRAY_CLOSE, i, i + 1, ch)
            i += 1
        elif line.startswith(PLACEHOLDER, i):
            end = i + len(PLACEHOLDER)
            yield Token(TokenKind.PLACEHOLDER, i, end, PLACEHOLDER)
            i = end
        else:
            tag = _scan_tag(line, i)
            yield tag
            i = tag.end
        text_start = i

    if text_start < n:
        yield Token(TokenKind.TEXT, text_start, n, line[text_start:])


def tokenize(text: str) -> Iterator[Token]:
    """Tokens for a whole document; offsets are per line, lines joined by LINE_BREAK."""
    prev: str | None = None
    for line in split_lines(text):
        if prev is not None:
            yield Token(TokenKind.LINE_BREAK, len(prev), len(prev) + 1, "\n")
        yield from tokenize_line(line)
        prev = line


def match_time_mark(text: str, pos: int = 0) -> int | None:
    """Length of the placeholder or well-formed time tag starting at pos."""
    if text.startswith(PLACEHOLDER, pos):
        return len(PLACEHOLDER)
    m = _MARK_RE.match(text, pos)
    if m:
        return m.end() - pos
    return None


def strip_marks(text: str) -> str:
    return _MARK_RE.sub("", text.replace(PLACEHOLDER, ""))
