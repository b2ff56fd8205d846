from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from colorama import Fore, Style

from timed_lyrics.lrc.tokens import split_lines
from timed_lyrics.lrc.validate import ValidationError
from timed_lyrics.messages import t


@dataclass(frozen=True, slots=True)
class Theme:
    location: str = Fore.CYAN + Style.BRIGHT
    error: str = Fore.RED + Style.BRIGHT
    source: str = Style.DIM
    caret: str = Fore.YELLOW + Style.BRIGHT
    ok: str = Fore.GREEN + Style.BRIGHT
    reset: str = Style.RESET_ALL


PLAIN = Theme(location="", error="", source="", caret="", ok="", reset="")


class ReportRenderer:
    """Formats validation errors with the offending source line and a caret."""

    def __init__(self, theme: Theme | None = None, show_source: bool = True):
        self.theme = theme or Theme()
        self.show_source = show_source

    def render_error(self, err: ValidationError, lines: Sequence[str]) -> list[str]:
        th = self.theme
        out = [
            f"{th.location}{err.line}:{err.column}{th.reset} "
            f"{th.error}[{err.kind.category.value}]{th.reset} {err.message}"
        ]
        if self.show_source and 1 <= err.line <= len(lines):
            src = lines[err.line - 1]
            out.append(f"    {th.source}{src}{th.reset}")
            out.append(f"    {' ' * min(err.column, len(src))}{th.caret}^{th.reset}")
        return out

    def render(self, text: str, errors: Sequence[ValidationError]) -> str:
        if not errors:
            return f"{self.theme.ok}{t('valid')}{self.theme.reset}"
        lines = split_lines(text)
        out: list[str] = []
        for err in errors:
            out.extend(self.render_error(err, lines))
        out.append(t("errors_total", count=len(errors)))
        return "\n".join(out)
