from __future__ import annotations

from timed_lyrics.lrc.tokens import strip_marks


def remove_all_time_tags(text: str) -> str:
    """Drop every placeholder and [mm:ss.cc] tag, keeping the lyrics."""
    return strip_marks(text)


def remove_extra_whitespace(text: str) -> str:
    return "\n".join(line.strip() for line in text.split("\n"))
