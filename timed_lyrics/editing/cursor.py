from __future__ import annotations

from dataclasses import dataclass
import logging

from timed_lyrics.config import PolicyConfig
from timed_lyrics.lrc.timecode import format_tag
from timed_lyrics.lrc.tokens import PLACEHOLDER, match_time_mark

logger = logging.getLogger(__name__)

_LINE_SEPARATORS = frozenset("\n\u2028\u2029")


def is_line_separator(ch: str) -> bool:
    return ch in _LINE_SEPARATORS


@dataclass(frozen=True, slots=True)
class TagInsertion:
    """Result of placing a time tag: the new buffer plus what was swapped."""

    text: str
    cursor: int
    inserted: str
    removed: str = ""

    @property
    def replaced_placeholder(self) -> bool:
        return self.removed == PLACEHOLDER

    @property
    def changed(self) -> bool:
        return self.inserted != self.removed


def advance_cursor(buffer: str, start: int, policy: PolicyConfig) -> int:
    """
    Where the cursor should land after a tag was placed right before `start`.

    Walks forward one character at a time and stops:
    - before the next time tag or placeholder;
    - after crossing a line separator (further empty lines are skipped with
      skip_empty_lines), or before it with stop_at_line_end;
    - with stop_at_next_word, at the start of the first word after the
      tagged one that is longer than max_word_chars.
    The end of the buffer counts as a line separator.
    """
    n = len(buffer)
    pos = start
    separator_found = False
    tagged_word_ended = False
    word_start = -1

    while True:
        at_end = pos >= n
        ch = "\n" if at_end else buffer[pos]

        if not at_end and match_time_mark(buffer, pos) is not None:
            break

        # checked after the mark test so that a mark right after the
        # separator wins
        if separator_found:
            if policy.skip_empty_lines and not at_end and is_line_separator(ch):
                pos += 1
                continue
            break

        if is_line_separator(ch):
            if pos != start and policy.stop_at_line_end:
                break
            separator_found = True

        # a time mark always precedes a word, so whitespace ends the word
        if policy.stop_at_next_word:
            if ch.isspace():
                if word_start != -1:
                    if pos - word_start > policy.max_word_chars:
                        # long untagged word: it gets its own tag
                        pos = word_start
                        break
                    word_start = -1
                else:
                    tagged_word_ended = True
            elif tagged_word_ended and word_start == -1:
                word_start = pos

        if at_end:
            break
        pos += 1

    return pos


def insert_time_tag(buffer: str, offset: int, timing: int, policy: PolicyConfig) -> TagInsertion:
    """
    Put a time tag at `offset` and move the cursor according to policy.

    timing == 0 inserts the placeholder. A real time replaces a mark that
    already starts at `offset`.
    """
    if not 0 <= offset <= len(buffer):
        raise ValueError(f"Offset {offset} outside buffer of length {len(buffer)}")
    if timing < 0:
        raise ValueError(f"Negative time: {timing}")

    removed = ""
    if timing > 0:
        length = match_time_mark(buffer, offset)
        if length:
            removed = buffer[offset : offset + length]
            buffer = buffer[:offset] + buffer[offset + length :]

    tag = PLACEHOLDER if timing == 0 else format_tag(timing)
    text = buffer[:offset] + tag + buffer[offset:]
    after = offset + len(tag)

    if policy.double_time_mark_keeps_cursor and removed == PLACEHOLDER:
        cursor = after
    else:
        cursor = advance_cursor(text, after, policy)

    logger.debug("Inserted %s at %d (replaced %r), cursor -> %d", tag, offset, removed, cursor)
    return TagInsertion(text=text, cursor=cursor, inserted=tag, removed=removed)


def cursor_offset(text: str, line: int, column: int = 0) -> int:
    """Buffer offset for a 1-based line and 0-based column, clamped to the text."""
    lines = text.split("\n")
    line = min(max(line, 1), len(lines))
    offset = sum(len(ln) + 1 for ln in lines[: line - 1])
    return offset + min(max(column, 0), len(lines[line - 1]))
