"""
Importer for the old escaped-markup lyrics dialect.

Old files look like `<1500>Hello <2100|300>world &amp; more`: a tag holds a
start time in milliseconds, optionally followed by `|duration` (dropped),
and plain text carries HTML entities for `<`, `>` and `&`. Some writers
escaped the tags themselves (`&lt;1500&gt;`); those are tags too.
"""

from __future__ import annotations

from enum import Enum
import logging
import re

from timed_lyrics.messages import t

from .timecode import format_tag

logger = logging.getLogger(__name__)

_BODY_RE = re.compile(r"(\d+)(?:\|(\d+))?")

_ESC_OPEN = "&lt;"
_ESC_CLOSE = "&gt;"


class LegacyFormatError(ValueError):
    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (offset {offset})")
        self.offset = offset


class _State(Enum):
    TEXT = 1
    RAW_TAG = 2
    ESCAPED_TAG = 3


def _unescape(s: str) -> str:
    return s.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")


def _tag(body: str) -> str | None:
    m = _BODY_RE.fullmatch(body)
    if not m:
        return None
    return format_tag(int(m.group(1)))


def import_legacy(text: str) -> str:
    out: list[str] = []
    saved: list[str] = []
    state = _State.TEXT
    tag_start = 0
    tags = 0

    n = len(text)
    i = 0
    while i < n:
        ch = text[i]

        if state is _State.TEXT:
            if ch == "<":
                out.append(_unescape("".join(saved)))
                saved.clear()
                state, tag_start = _State.RAW_TAG, i
            elif ch == ">":
                raise LegacyFormatError(t("legacy_stray_close"), i)
            elif text.startswith(_ESC_OPEN, i) and text[i + 4 : i + 5].isdecimal():
                out.append(_unescape("".join(saved)))
                saved.clear()
                state, tag_start = _State.ESCAPED_TAG, i
                i += len(_ESC_OPEN)
                continue
            else:
                saved.append(ch)
            i += 1

        elif state is _State.RAW_TAG:
            if ch == ">":
                body = "".join(saved)
                tag = _tag(body)
                if tag is None:
                    raise LegacyFormatError(t("legacy_bad_tag", body=body), tag_start)
                out.append(tag)
                tags += 1
                saved.clear()
                state = _State.TEXT
            elif ch == "<":
                raise LegacyFormatError(t("legacy_nested_open"), i)
            else:
                saved.append(ch)
            i += 1

        else:
            if text.startswith(_ESC_CLOSE, i):
                tag = _tag("".join(saved))
                if tag is not None:
                    out.append(tag)
                    tags += 1
                    saved.clear()
                    state = _State.TEXT
                    i += len(_ESC_CLOSE)
                    continue
            elif ch.isdecimal() or ch == "|":
                saved.append(ch)
                i += 1
                continue
            # escaped "<" around plain text: literal, re-read ch as text
            saved.insert(0, _ESC_OPEN)
            state = _State.TEXT

    if state is _State.RAW_TAG:
        raise LegacyFormatError(t("legacy_unterminated"), tag_start)
    if state is _State.ESCAPED_TAG:
        saved.insert(0, _ESC_OPEN)

    out.append(_unescape("".join(saved)))
    logger.debug("Legacy import: %d tag(s) converted", tags)
    return "".join(out)
