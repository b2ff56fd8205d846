from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, Sequence

from timed_lyrics.config import PolicyConfig
from timed_lyrics.messages import t

from .model import FormatProfile
from .timecode import split
from .tokens import TagFault, TokenKind, split_lines, tokenize_line

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    STRUCTURAL = "structural"
    SEMANTIC = "semantic"
    POLICY = "policy"
    PRODUCTION = "production"
    PARAGRAPH = "paragraph"


class ErrorKind(Enum):
    BLOCKS_DISABLED = ("blocks_disabled", ErrorCategory.POLICY)
    DOUBLE_BOUNDARY = ("double_boundary", ErrorCategory.POLICY)
    BLOCK_TOO_LONG = ("block_too_long", ErrorCategory.POLICY)
    MISSING_OPENING_TAG = ("missing_opening_tag", ErrorCategory.STRUCTURAL)
    MISSING_CLOSING_TAG = ("missing_closing_tag", ErrorCategory.STRUCTURAL)
    STRAY_CLOSING_BRACKET = ("stray_closing_bracket", ErrorCategory.STRUCTURAL)
    INVALID_TAG_CHAR = ("invalid_tag_char", ErrorCategory.STRUCTURAL)
    UNCLOSED_TAG = ("unclosed_tag", ErrorCategory.STRUCTURAL)
    INVALID_TIME_TAG = ("invalid_time_tag", ErrorCategory.SEMANTIC)
    SECONDS_OUT_OF_RANGE = ("seconds_out_of_range", ErrorCategory.SEMANTIC)
    TIME_GOES_BACKWARD = ("time_goes_backward", ErrorCategory.SEMANTIC)
    PLACEHOLDER_PRESENT = ("placeholder_present", ErrorCategory.PRODUCTION)
    PARAGRAPH = ("paragraph", ErrorCategory.PARAGRAPH)

    def __init__(self, key: str, category: ErrorCategory):
        self.key = key
        self.category = category


@dataclass(frozen=True, slots=True)
class ValidationError:
    line: int  # 1-based
    column: int  # 0-based
    message: str
    kind: ErrorKind


@dataclass(frozen=True, slots=True)
class ParagraphIssue:
    relative_line: int  # 0-based, relative to the first line of the block
    column: int
    message: str


ParagraphValidator = Callable[[str], Sequence[ParagraphIssue]]


class LyricsValidationError(ValueError):
    def __init__(self, errors: Sequence[ValidationError]):
        self.errors = list(errors)
        self.error = first_error(self.errors)
        if self.error is None:
            raise ValueError("LyricsValidationError requires at least one error")
        super().__init__(
            t("error_at", line=self.error.line, column=self.error.column, message=self.error.message)
        )


def _err(line: int, column: int, kind: ErrorKind, **kwargs: str | int) -> ValidationError:
    return ValidationError(line=line, column=column, message=t(kind.key, **kwargs), kind=kind)


def _paragraph_errors(
    hook: ParagraphValidator, text: str, first_line: int
) -> list[ValidationError]:
    return [
        ValidationError(
            line=first_line + issue.relative_line,
            column=issue.column,
            message=issue.message,
            kind=ErrorKind.PARAGRAPH,
        )
        for issue in hook(text)
    ]


def _check_tags(
    line: str, lineno: int, last_time: int, paragraph: list[str], errors: list[ValidationError]
) -> int:
    """Verify every tag of a non-blank line; returns the updated last time."""
    for tok in tokenize_line(line):
        if tok.kind is TokenKind.TEXT:
            paragraph.append(tok.text)
        elif tok.kind is TokenKind.STRAY_CLOSE:
            errors.append(_err(lineno, tok.start, ErrorKind.STRAY_CLOSING_BRACKET))
        elif tok.kind is TokenKind.PLACEHOLDER:
            errors.append(_err(lineno, tok.start + 1, ErrorKind.PLACEHOLDER_PRESENT))
        elif tok.fault is TagFault.INVALID_CHAR:
            # rest of the line is not scanned
            errors.append(_err(lineno, tok.fault_at or 0, ErrorKind.INVALID_TAG_CHAR))
        elif tok.fault is TagFault.UNTERMINATED:
            errors.append(_err(lineno, tok.fault_at or 0, ErrorKind.UNCLOSED_TAG))
        elif tok.fault is TagFault.INVALID_TIME or tok.value is None:
            errors.append(_err(lineno, tok.start + 1, ErrorKind.INVALID_TIME_TAG))
        else:
            _mm, ss, _cc = split(tok.content)
            if ss >= 60:
                errors.append(_err(lineno, tok.start + 1, ErrorKind.SECONDS_OUT_OF_RANGE))
            if tok.value < last_time:
                errors.append(_err(lineno, tok.start + 1, ErrorKind.TIME_GOES_BACKWARD))
            last_time = tok.value
    return last_time


def validate(
    text: str,
    profile: FormatProfile,
    policy: PolicyConfig,
    paragraph_validator: ParagraphValidator | None = None,
) -> list[ValidationError]:
    """
    Collect every error in the document, in the order found.

    Never stops early: each rule reports and scanning moves on. For the CDG
    profile every closed block is handed to `paragraph_validator`, and the
    issues it returns are remapped to absolute line numbers.
    """
    errors: list[ValidationError] = []
    lines = split_lines(text)
    hook = paragraph_validator if profile.validates_paragraphs else None

    lines_in_block = 0
    last_time = 0
    paragraph: list[str] = []

    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            if not policy.support_blocks:
                errors.append(_err(lineno, 0, ErrorKind.BLOCKS_DISABLED))
            elif lines_in_block == 0:
                errors.append(_err(lineno, 0, ErrorKind.DOUBLE_BOUNDARY))
            elif hook is not None:
                errors.extend(_paragraph_errors(hook, "".join(paragraph), lineno - lines_in_block))
            lines_in_block = 0
            paragraph.clear()
            continue

        lines_in_block += 1
        if policy.support_blocks and lines_in_block > policy.max_lines_per_block:
            errors.append(_err(lineno, 0, ErrorKind.BLOCK_TOO_LONG, max_lines=policy.max_lines_per_block))

        if not line.startswith("["):
            errors.append(_err(lineno, 0, ErrorKind.MISSING_OPENING_TAG))

        if profile.requires_closing_tag and not line.rstrip().endswith("]"):
            errors.append(_err(lineno, 0, ErrorKind.MISSING_CLOSING_TAG))

        last_time = _check_tags(line, lineno, last_time, paragraph, errors)
        paragraph.append("\n")

    # the last block has no trailing boundary; without blocks there is no
    # paragraph to check
    if hook is not None and policy.support_blocks and lines_in_block:
        errors.extend(
            _paragraph_errors(hook, "".join(paragraph), len(lines) + 1 - lines_in_block)
        )

    logger.debug("Validated %d lines as %s: %d error(s)", len(lines), profile.name, len(errors))
    return errors


def first_error(errors: Sequence[ValidationError]) -> ValidationError | None:
    """
    Earliest error by document position, (line, column).

    Not necessarily errors[0]: paragraph issues are appended when their block
    closes, after the tag errors of every line in that block.
    """
    if not errors:
        return None
    return min(errors, key=lambda e: (e.line, e.column))


def ensure_valid(
    text: str,
    profile: FormatProfile,
    policy: PolicyConfig,
    paragraph_validator: ParagraphValidator | None = None,
) -> None:
    """Pass/fail check; raises LyricsValidationError pointing at the first error."""
    errors = validate(text, profile, policy, paragraph_validator)
    if errors:
        raise LyricsValidationError(errors)
