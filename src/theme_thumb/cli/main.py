"""CLI entry point — click group exposing thumbnail generation and cache sweeps."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from theme_thumb.core.config import ConfigManager
from theme_thumb.core.events import EventBus
from theme_thumb.thumbnails import ThumbnailService


def _build_service(ctx: click.Context) -> ThumbnailService:
    """Create the service from the options stored on the group context."""
    opts = ctx.obj
    config = ConfigManager(config_dir=opts["config_dir"])
    config.load()
    if opts["cache_dir"] is not None:
        config.set_global("cache_dir", str(opts["cache_dir"]))

    bus = EventBus()
    if opts["verbose"]:
        bus.subscribe("cache_hit", lambda **kw: click.echo(f"  cached: {kw['path']}", err=True))
        bus.subscribe("generated", lambda **kw: click.echo(f"  generated {kw['count']} glyphs", err=True))
        bus.subscribe("removed", lambda **kw: click.echo(f"  removed {kw['path']}", err=True))

    service = ThumbnailService(config=config, event_bus=bus)
    service.update_scale_factor(opts["scale"])
    return service


def _report(path: Path | None, what: str) -> None:
    """Print *path* or fail with exit code 1."""
    if path is None:
        raise click.ClickException(f"No {what} available")
    click.echo(str(path))


@click.group()
@click.version_option(package_name="theme-thumb")
@click.option("-s", "--scale", type=float, default=1.0, show_default=True, help="Display scale factor.")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, resolve_path=True),
    default=None,
    help="Thumbnail cache root (default: ~/.cache/deepin/dde-api/theme_thumb).",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, resolve_path=True),
    default=None,
    help="Configuration directory (default: ~/.config/theme-thumb).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log progress to stderr.")
@click.pass_context
def cli(ctx: click.Context, scale: float, cache_dir: str | None, config_dir: str | None, verbose: bool) -> None:
    """Theme Thumb — cached previews of cursor and icon themes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {
        "scale": scale,
        "cache_dir": Path(cache_dir) if cache_dir else None,
        "config_dir": Path(config_dir) if config_dir else None,
        "verbose": verbose,
    }


@cli.command(name="cursor")
@click.argument("theme_id")
@click.argument("theme_dir", type=click.Path(exists=True, resolve_path=True))
@click.pass_context
def cursor_cmd(ctx: click.Context, theme_id: str, theme_dir: str) -> None:
    """Print the cursor thumbnail of THEME_ID found in THEME_DIR."""
    _report(_build_service(ctx).get_cursor(theme_id, Path(theme_dir)), "cursor thumbnail")


@cli.command(name="icon")
@click.argument("theme_id")
@click.argument("desc_path", type=click.Path(exists=True, resolve_path=True))
@click.pass_context
def icon_cmd(ctx: click.Context, theme_id: str, desc_path: str) -> None:
    """Print the icon thumbnail of icon theme THEME_ID described by DESC_PATH."""
    _report(_build_service(ctx).get_icon(theme_id, Path(desc_path)), "icon thumbnail")


@cli.command(name="global")
@click.argument("theme_id")
@click.argument("desc_file", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("-g", "--gtk-theme", default="", help="Active GTK theme name (selects the dark example).")
@click.pass_context
def global_cmd(ctx: click.Context, theme_id: str, desc_file: str, gtk_theme: str) -> None:
    """Print the example image of the theme described by DESC_FILE."""
    from theme_thumb.core.exceptions import DecodeError
    from theme_thumb.loaders.theme import load_theme_descriptor

    try:
        descriptor = load_theme_descriptor(Path(desc_file))
    except DecodeError as exc:
        raise click.ClickException(str(exc)) from exc
    _report(_build_service(ctx).get_global(theme_id, descriptor, gtk_theme), "example image")


@cli.command(name="gc")
@click.pass_context
def gc_cmd(ctx: click.Context) -> None:
    """Remove cache directories of other scale factors and old format versions."""
    removed = _build_service(ctx).init()
    click.echo(f"Removed {len(removed)} stale cache directories")
