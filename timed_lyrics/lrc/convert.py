from __future__ import annotations

import logging

from timed_lyrics.config import PolicyConfig

from .model import FormatProfile, Line, LyricsModel, Syllable
from .timecode import InvalidTimeFormat, decode, format_tag
from .tokens import split_lines
from .validate import ParagraphValidator, first_error, validate

logger = logging.getLogger(__name__)


def _parse_line(line: str) -> Line | None:
    parts = line.split("[")
    # first part must be empty, i.e. the line starts with a tag
    if parts[0]:
        return None

    syllables: list[Syllable] = []
    for part in parts[1:]:
        timeoff = part.find("]")
        if timeoff < 0:
            return None
        try:
            timing = decode(part[:timeoff])
        except InvalidTimeFormat:
            return None
        syllables.append(Syllable(timing=timing, text=part[timeoff + 1 :]))
    return tuple(syllables)


def export_lyrics(
    text: str,
    profile: FormatProfile,
    policy: PolicyConfig,
    paragraph_validator: ParagraphValidator | None = None,
) -> LyricsModel:
    """
    Text -> Block/Line/Syllable model.

    All or nothing: any validation error, of any kind, yields an empty model.
    """
    errors = validate(text, profile, policy, paragraph_validator)
    err = first_error(errors)
    if err is not None:
        logger.info(
            "Export aborted: %d validation error(s), first at line %d: %s",
            len(errors),
            err.line,
            err.message,
        )
        return LyricsModel()

    blocks: list[tuple[Line, ...]] = []
    current: list[Line] = []

    for lineno, line in enumerate(split_lines(text), start=1):
        if not line.strip():
            # end of paragraph
            if current:
                blocks.append(tuple(current))
                current = []
            continue

        parsed = _parse_line(line)
        if parsed is None:
            logger.info("Export aborted: line %d does not start with a time tag", lineno)
            return LyricsModel()
        current.append(parsed)

    if current:
        blocks.append(tuple(current))

    return LyricsModel(blocks=tuple(blocks))


def import_lyrics(model: LyricsModel) -> str:
    """Model -> text; one line per Line, an empty line after every Block."""
    out: list[str] = []
    for block in model.blocks:
        for line in block:
            out.append("".join(format_tag(s.timing) + s.text for s in line))
            out.append("\n")
        out.append("\n")
    return "".join(out)
