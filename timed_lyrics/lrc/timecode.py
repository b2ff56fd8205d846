from __future__ import annotations

import re

_TIME_RE = re.compile(r"(\d+):(\d+)\.(\d+)")  # mm:ss.cc, minutes unbounded


class InvalidTimeFormat(ValueError):
    pass


def split(text: str) -> tuple[int, int, int]:
    """Return (minutes, seconds, centiseconds) without range checks."""
    m = _TIME_RE.fullmatch(text)
    if not m:
        raise InvalidTimeFormat(f"Invalid time: {text!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def decode(text: str) -> int:
    """
    "01:02.50" -> 62500

    Seconds >= 60 are accepted here; the validator reports them.
    """
    mm, ss, cc = split(text)
    return mm * 60_000 + ss * 1_000 + cc * 10


def encode(ms: int) -> str:
    if ms < 0:
        raise ValueError(f"Negative time: {ms}")
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"


def format_tag(ms: int) -> str:
    return f"[{encode(ms)}]"
