from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class FormatProfile(Enum):
    LRC1 = "lrc1"  # single leading tag per line
    LRC2 = "lrc2"
    ULTRASTAR = "ultrastar"
    CDG = "cdg"

    @property
    def requires_closing_tag(self) -> bool:
        return self is not FormatProfile.LRC1

    @property
    def validates_paragraphs(self) -> bool:
        return self is FormatProfile.CDG


@dataclass(frozen=True, slots=True)
class Syllable:
    timing: int
    text: str


Line = tuple[Syllable, ...]
Block = tuple[Line, ...]


@dataclass(frozen=True, slots=True)
class LyricsModel:
    blocks: tuple[Block, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    def syllables(self) -> Iterator[Syllable]:
        for block in self.blocks:
            for line in block:
                yield from line
