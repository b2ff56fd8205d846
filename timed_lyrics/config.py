from __future__ import annotations

import json
from dataclasses import dataclass, fields
import logging
import os
from pathlib import Path
from typing import Any

from timed_lyrics.lrc.model import FormatProfile

logger = logging.getLogger(__name__)

_FALSE_VALUES = ("0", "false", "False", "no", "off")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "timed-lyrics"
    return Path.home() / ".config" / "timed-lyrics"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True, slots=True)
class PolicyConfig:
    # Blocks
    support_blocks: bool = True
    max_lines_per_block: int = 8

    # Cursor movement after a time tag is placed
    skip_empty_lines: bool = True
    stop_at_line_end: bool = False
    stop_at_next_word: bool = False
    max_word_chars: int = 3
    double_time_mark_keeps_cursor: bool = False


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path
    profile: FormatProfile
    policy: PolicyConfig


def _read_config_json(config_dir: Path) -> dict[str, Any]:
    cfg_path = config_dir / "config.json"
    if not cfg_path.exists():
        return {}
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce(type_name: str, raw: Any) -> bool | int:
    if type_name == "bool":
        if isinstance(raw, bool):
            return raw
        return str(raw).strip() not in _FALSE_VALUES
    return int(raw)


def _policy_types() -> dict[str, str]:
    # annotations are strings under `from __future__ import annotations`
    return {f.name: str(f.type) for f in fields(PolicyConfig)}


def _parse_profile(raw: Any) -> FormatProfile | None:
    try:
        return FormatProfile(str(raw).strip().lower())
    except ValueError:
        logger.info("Unknown profile '%s', ignoring", raw)
        return None


def load_config() -> AppConfig:
    # Priority per key: config.json → TIMED_LYRICS_<KEY> → default
    config_dir = _config_dir()
    data = _read_config_json(config_dir)

    overrides: dict[str, bool | int] = {}
    for name, type_name in _policy_types().items():
        raw = data.get(name)
        if raw is None:
            raw = os.getenv(f"TIMED_LYRICS_{name.upper()}")
        if raw is None:
            continue
        overrides[name] = _coerce(type_name, raw)

    profile = None
    if data.get("profile"):
        profile = _parse_profile(data["profile"])
    if profile is None and os.getenv("TIMED_LYRICS_PROFILE"):
        profile = _parse_profile(os.getenv("TIMED_LYRICS_PROFILE"))

    return AppConfig(
        config_dir=config_dir,
        profile=profile or FormatProfile.LRC2,
        policy=PolicyConfig(**overrides),  # type: ignore[arg-type]
    )


def save_config_value(key: str, value: str) -> None:
    types = _policy_types()
    stored: str | bool | int
    if key == "profile":
        profile = _parse_profile(value)
        if profile is None:
            raise ValueError(f"Unknown profile: {value}")
        stored = profile.value
    elif key in types:
        stored = _coerce(types[key], value)
    else:
        raise ValueError(f"Unknown config key: {key}")

    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _read_config_json(cfg_path.parent)
    data[key] = stored
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
