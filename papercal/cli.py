import logging
from pathlib import Path
from typing import Optional

import typer

from .errors import CalendarError
from .generator import CalendarGenerator
from .utils import load_config, load_store

app = typer.Typer()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _apply_overrides(cfg, **overrides):
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return cfg
    # Re-validate so week start names and month bounds are checked.
    return type(cfg)(**{**cfg.model_dump(), **update})


@app.command()
def generate(
    config: Optional[Path] = typer.Option(None, help="YAML configuration file (default: config/calendar.yaml)"),
    year: Optional[int] = typer.Option(None, help="Year, 0 means current year"),
    month: Optional[int] = typer.Option(None, help="Month (1-12), 0 renders the whole year"),
    week_start: Optional[str] = typer.Option(None, help="0-6 (0=Sunday) or a day name"),
    renderer: Optional[str] = typer.Option(None, help="Output renderer"),
    output_dir: Optional[str] = typer.Option(None, help="Output directory"),
    special_days: Optional[str] = typer.Option(None, help="Special days file (YAML or TOML)"),
    language: Optional[str] = typer.Option(None, help="Output language: es or en"),
    show_extra_days: Optional[bool] = typer.Option(None, help="Show days of the neighbouring months"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Generate a calendar for a month or a whole year.
    """
    _setup_logging(verbose)
    try:
        cfg = _apply_overrides(
            load_config(config),
            year=year,
            month=month,
            week_start=week_start,
            renderer=renderer,
            output_dir=output_dir,
            special_days=special_days,
            language=language,
            show_extra_days=show_extra_days,
        )
        gen = CalendarGenerator(cfg)
        paths = gen.generate()
    except (CalendarError, ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for path in paths:
        typer.echo(str(path))


@app.command()
def verify_config(
    config: Optional[Path] = typer.Option(None, help="YAML configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Load configuration and special days without rendering anything."""
    _setup_logging(verbose)
    try:
        cfg = load_config(config).resolved()
        store = load_store(cfg.special_days, cfg.year, cfg.month)
    except (CalendarError, ValueError, OSError) as e:
        typer.echo(f"❌ Configuration invalid: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("✅ Configuration valid!")
    typer.echo(f"Found {len(store)} special days for {cfg.year}.")
    for key in sorted(store):
        day = store.get(key)
        typer.echo(f"  {key}: {day.note.text or day.icon}")


def main():
    app()
