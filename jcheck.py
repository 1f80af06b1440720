"""CLI entry point for checking JPEG documents."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from src.config_loader import ConfigError, load_config
from src.config_template import DEFAULT_CONFIG_FILENAME, copy_default_config
from src.datatypes import AppConfig
from src.jpeg_check import __version__
from src.jpeg_check.cli_utils import AttachedValue, explicit_value, merged_flag
from src.jpeg_check.document import resolve_loader
from src.jpeg_check.errors import CLIAppError, DispatchError, SelectorError
from src.jpeg_check.runner import RunRequest, RunResult, run
from src.jpeg_check.selectors import OPTIONS, SelectorSet, parse_options

logger = logging.getLogger("jcheck")

CONFIG_ENV_VAR = "JCHECK_CONFIG"

F = TypeVar("F", bound=Callable[..., Any])


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )


def _load_app_config(config_path: Optional[str]) -> AppConfig:
    """Load *config_path*, or ``./jcheck.toml`` when present, or fall back to defaults."""

    if config_path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if not candidate.is_file():
            return AppConfig()
        path = candidate
    else:
        path = Path(config_path).expanduser()
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise CLIAppError(f"Config file not found: {path}", code=2) from exc
    except ConfigError as exc:
        raise CLIAppError(
            f"Invalid config {path}: {exc}",
            code=2,
            rich_message=f"[red]Invalid config[/red] {escape(str(path))}: {escape(str(exc))}",
        ) from exc


def _parse_selectors(raw: Dict[str, Optional[str]]) -> SelectorSet:
    try:
        return parse_options(raw)
    except SelectorError as exc:
        raise CLIAppError(
            f"jcheck: {exc}",
            code=2,
            rich_message=f"[red]jcheck:[/red] {escape(str(exc))}",
        ) from exc


def _selector_option(name: str) -> Callable[[F], F]:
    spec = OPTIONS[name]
    return click.option(spec.flag, name, default=None, metavar=spec.metavar, help=spec.help)


def _run_cli_entry(
    ctx: click.Context,
    *,
    filepath: Optional[Path],
    config_path: Optional[str],
    loader_spec: Optional[str],
    output: Optional[Path],
    write_config: bool,
    verbose: bool,
    no_color: bool,
    begin: Optional[int],
    end: Optional[int],
    tables: bool,
    flags: Dict[str, bool],
    raw_selectors: Dict[str, Optional[str]],
) -> Optional[RunResult]:
    """Resolve configuration, parse every selector, then run the check."""

    if write_config:
        target = Path(config_path).expanduser() if config_path else Path.cwd() / DEFAULT_CONFIG_FILENAME
        try:
            written = copy_default_config(target)
        except FileExistsError as exc:
            raise CLIAppError(str(exc), code=2) from exc
        click.echo(f"Config written to {written}")
        return None
    if filepath is None:
        raise click.UsageError("Missing the name of the file to process.", ctx=ctx)

    cfg = _load_app_config(config_path)
    verbose = merged_flag(ctx, "verbose", verbose, default=cfg.cli.verbose)
    no_color = merged_flag(ctx, "no_color", no_color, default=cfg.cli.no_color)
    _configure_logging(verbose)
    logger.debug("Using configuration %s", cfg)
    console = Console(no_color=no_color, highlight=False)
    ctx.meta["jcheck.console"] = console

    selectors = _parse_selectors(raw_selectors)

    control = replace(
        cfg.parse,
        **{name: merged_flag(ctx, name, value, default=getattr(cfg.parse, name)) for name, value in flags.items()},
    )
    begin_override = explicit_value(ctx, "begin", begin)
    end_override = explicit_value(ctx, "end", end)
    if begin_override is not None:
        control.begin = begin_override
    if end_override is not None:
        control.end = end_override
    if control.end is not None and control.end < control.begin:
        raise CLIAppError(f"-e ({control.end}) must not be lower than -b ({control.begin}).", code=2)

    display = replace(cfg.display, tables=merged_flag(ctx, "tables", tables, default=cfg.display.tables))
    loader = resolve_loader(loader_spec if loader_spec is not None else cfg.document.loader)

    request = RunRequest(
        input_path=filepath,
        loader=loader,
        selectors=selectors,
        control=control,
        display=display,
        output_path=output,
        console=console,
    )
    try:
        return run(request)
    except DispatchError as exc:
        raise CLIAppError(
            f"jcheck: {exc}",
            rich_message=f"[red]jcheck:[/red] {escape(str(exc))}",
        ) from exc


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", prog_name="jcheck", message="jcheck version %(version)s")
@click.option(
    "--config",
    "config_path",
    default=None,
    envvar=CONFIG_ENV_VAR,
    help=f"Path to a TOML config (default: ./{DEFAULT_CONFIG_FILENAME} when present).",
)
@click.option("--write-config", is_flag=True, help="Write the default config to --config (or ./jcheck.toml) and exit.")
@click.option("--loader", "loader_spec", default=None, help="Document backend as module:callable; overrides [document].loader.")
@click.option("--verbose", is_flag=True, help="Log every dispatched call.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
@click.option("-w", "warn", is_flag=True, help="Warn about inconsistencies and errors during parsing.")
@click.option("-tidyup", "tidyup", is_flag=True, help="Fix common errors and clean the file after analysis.")
@click.option("-rp", "recurse", is_flag=True, help="Recursively parse embedded pictures (thumbnails).")
@click.option("-m", "markers", is_flag=True, help="Print markers and offsets as parsing goes.")
@click.option("-mcu", "mcu", is_flag=True, help="Print detailed MCU parsing (very verbose).")
@click.option("-du", "du", is_flag=True, help="Print each data unit extracted from MCUs.")
@click.option("-b", "begin", type=AttachedValue(click.IntRange(min=0)), default=None, metavar="N", help="Begin printing MCU/DU at MCU N.")
@click.option("-e", "end", type=AttachedValue(click.IntRange(min=0)), default=None, metavar="N", help="End printing MCU/DU at MCU N.")
@click.option("-t", "tables", is_flag=True, help="Print all tables after parsing, in file order.")
@_selector_option("meta")
@_selector_option("qu")
@_selector_option("en")
@_selector_option("sc")
@_selector_option("rmeta")
@_selector_option("sthumb")
@_selector_option("spict")
@click.option(
    "-o",
    "output",
    type=AttachedValue(click.Path(dir_okay=False, path_type=Path)),
    default=None,
    metavar="PATH",
    help="Write the (possibly modified) document to a new file.",
)
@click.argument("filepath", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def main(
    ctx: click.Context,
    filepath: Optional[Path],
    config_path: Optional[str],
    write_config: bool,
    loader_spec: Optional[str],
    verbose: bool,
    no_color: bool,
    warn: bool,
    tidyup: bool,
    recurse: bool,
    markers: bool,
    mcu: bool,
    du: bool,
    begin: Optional[int],
    end: Optional[int],
    tables: bool,
    meta: Optional[str],
    qu: Optional[str],
    en: Optional[str],
    sc: Optional[str],
    rmeta: Optional[str],
    sthumb: Optional[str],
    spict: Optional[str],
    output: Optional[Path],
) -> None:
    """Check that FILEPATH is a valid JPEG document, print what it contains and
    optionally fix or strip it."""

    try:
        _run_cli_entry(
            ctx,
            filepath=filepath,
            config_path=config_path,
            loader_spec=loader_spec,
            output=output,
            write_config=write_config,
            verbose=verbose,
            no_color=no_color,
            begin=begin,
            end=end,
            tables=tables,
            flags={
                "warn": warn,
                "tidyup": tidyup,
                "recurse": recurse,
                "markers": markers,
                "mcu": mcu,
                "du": du,
            },
            raw_selectors={
                "meta": meta,
                "rmeta": rmeta,
                "qu": qu,
                "en": en,
                "sc": sc,
                "sthumb": sthumb,
                "spict": spict,
            },
        )
    except CLIAppError as exc:
        console = ctx.meta.get("jcheck.console") or Console(no_color=no_color, highlight=False)
        console.print(exc.rich_message)
        raise click.exceptions.Exit(exc.code) from exc


if __name__ == "__main__":
    main()
