from __future__ import annotations

import json
from typing import Any

from .model import Block, Line, LyricsModel, Syllable
from .timecode import encode


class ModelFormatError(ValueError):
    pass


def dump_model_json(model: LyricsModel) -> str:
    return json.dumps(
        {
            "blocks": [
                [[{"t_ms": s.timing, "time": encode(s.timing), "text": s.text} for s in line] for line in block]
                for block in model.blocks
            ],
        },
        ensure_ascii=False,
        indent=2,
    )


def _syllable(raw: Any) -> Syllable:
    if not isinstance(raw, dict):
        raise ModelFormatError(f"Syllable must be an object, got {type(raw).__name__}")
    try:
        timing = int(raw["t_ms"])
        text = str(raw.get("text", ""))
    except (KeyError, TypeError, ValueError) as e:
        raise ModelFormatError(f"Invalid syllable: {raw!r}") from e
    if timing < 0:
        raise ModelFormatError(f"Negative syllable time: {timing}")
    return Syllable(timing=timing, text=text)


def load_model_json(text: str) -> LyricsModel:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ModelFormatError("Invalid JSON") from e
    if not isinstance(data, dict) or not isinstance(data.get("blocks"), list):
        raise ModelFormatError("Expected an object with a 'blocks' list")

    blocks: list[Block] = []
    for raw_block in data["blocks"]:
        if not isinstance(raw_block, list) or not raw_block:
            raise ModelFormatError("Block must be a non-empty list of lines")
        lines: list[Line] = []
        for raw_line in raw_block:
            if not isinstance(raw_line, list) or not raw_line:
                raise ModelFormatError("Line must be a non-empty list of syllables")
            lines.append(tuple(_syllable(s) for s in raw_line))
        blocks.append(tuple(lines))
    return LyricsModel(blocks=tuple(blocks))
