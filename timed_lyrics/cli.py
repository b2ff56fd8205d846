from __future__ import annotations

from dataclasses import fields
import sys
from pathlib import Path

import typer
from colorama import just_fix_windows_console

from timed_lyrics.config import AppConfig, load_config, save_config_value
from timed_lyrics.editing.cleanup import remove_all_time_tags, remove_extra_whitespace
from timed_lyrics.editing.cursor import cursor_offset, insert_time_tag
from timed_lyrics.logging_setup import setup_logging
from timed_lyrics.lrc.convert import export_lyrics, import_lyrics
from timed_lyrics.lrc.export import ModelFormatError, dump_model_json, load_model_json
from timed_lyrics.lrc.legacy import LegacyFormatError, import_legacy
from timed_lyrics.lrc.model import FormatProfile
from timed_lyrics.lrc.timecode import InvalidTimeFormat, decode
from timed_lyrics.lrc.validate import first_error, validate
from timed_lyrics.messages import t
from timed_lyrics.render.report import PLAIN, ReportRenderer, Theme


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _profile(cfg: AppConfig, profile: str | None) -> FormatProfile:
    if profile is None:
        return cfg.profile
    try:
        return FormatProfile(profile.lower())
    except ValueError:
        raise typer.BadParameter("profile must be one of: lrc1, lrc2, ultrastar, cdg")


def _write(data: str, out: Path | None) -> None:
    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command("validate")
def validate_cmd(
    lyrics_path: Path,
    profile: str | None = typer.Option(None, "--profile", help="lrc1|lrc2|ultrastar|cdg"),
    show_all: bool = typer.Option(False, "--all", help="Report every error, not only the first one"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Validate timed lyrics; exit code 1 if anything is wrong."""
    setup_logging(debug)
    cfg = load_config()
    text = lyrics_path.read_text(encoding="utf-8")
    errors = validate(text, _profile(cfg, profile), cfg.policy)

    use_color = not no_color and sys.stdout.isatty()
    renderer = ReportRenderer(theme=Theme() if use_color else PLAIN)
    err = None if show_all else first_error(errors)
    if err is not None:
        typer.echo(renderer.render(text, [err]))
        typer.echo(t("cursor_at", offset=cursor_offset(text, err.line, err.column)))
    else:
        typer.echo(renderer.render(text, errors))
    if errors:
        raise typer.Exit(code=1)


@app.command()
def export(
    lyrics_path: Path,
    profile: str | None = typer.Option(None, "--profile", help="lrc1|lrc2|ultrastar|cdg"),
    fmt: str = typer.Option("json", "--format", case_sensitive=False, help="json|lrc"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Export timed lyrics as a block/line/syllable model."""
    setup_logging(debug)
    cfg = load_config()
    text = lyrics_path.read_text(encoding="utf-8")
    model = export_lyrics(text, _profile(cfg, profile), cfg.policy)
    if model.is_empty and text.strip():
        typer.echo(t("export_failed"), err=True)
        raise typer.Exit(code=1)

    fmt_l = fmt.lower()
    if fmt_l == "json":
        data = dump_model_json(model) + "\n"
    elif fmt_l == "lrc":
        data = import_lyrics(model)
    else:
        raise typer.BadParameter("format must be one of: json, lrc")
    _write(data, out)


@app.command("import")
def import_cmd(
    model_path: Path,
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Turn a JSON model (as written by `export`) back into timed lyrics."""
    try:
        model = load_model_json(model_path.read_text(encoding="utf-8"))
    except ModelFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _write(import_lyrics(model), out)


@app.command()
def legacy(
    legacy_path: Path,
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Convert lyrics from the old <ms>-tag format."""
    try:
        data = import_legacy(legacy_path.read_text(encoding="utf-8"))
    except LegacyFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    _write(data, out)


@app.command()
def strip(
    lyrics_path: Path,
    whitespace: bool = typer.Option(False, "--whitespace", help="Also trim every line"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Remove all time tags and placeholders."""
    data = remove_all_time_tags(lyrics_path.read_text(encoding="utf-8"))
    if whitespace:
        data = remove_extra_whitespace(data)
    _write(data, out)


@app.command()
def tag(
    lyrics_path: Path,
    offset: int = typer.Option(..., "--offset", help="Buffer offset to insert at"),
    time: str = typer.Option("0", "--time", help="mm:ss.cc, or 0 for a placeholder"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Insert a time tag and report where the cursor moves next."""
    cfg = load_config()
    try:
        timing = 0 if time == "0" else decode(time)
    except InvalidTimeFormat:
        raise typer.BadParameter("time must be mm:ss.cc or 0")

    text = lyrics_path.read_text(encoding="utf-8")
    try:
        res = insert_time_tag(text, offset, timing, cfg.policy)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    _write(res.text, out)
    typer.echo(t("cursor_at", offset=res.cursor), err=True)


@app.command()
def config(
    profile: str | None = typer.Option(None, "--profile", help="Default profile: lrc1|lrc2|ultrastar|cdg"),
    settings: list[str] = typer.Option([], "--set", help="Policy setting as key=value"),
):
    """Show or change the saved configuration."""
    try:
        if profile is not None:
            save_config_value("profile", profile)
        for item in settings:
            key, sep, value = item.partition("=")
            if not sep:
                raise typer.BadParameter(f"expected key=value, got {item!r}")
            save_config_value(key.strip(), value.strip())
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    cfg = load_config()
    typer.echo(f"profile={cfg.profile.value}")
    for f in fields(cfg.policy):
        typer.echo(f"{f.name}={getattr(cfg.policy, f.name)}")


def main() -> None:
    just_fix_windows_console()
    app()


if __name__ == "__main__":
    main()
