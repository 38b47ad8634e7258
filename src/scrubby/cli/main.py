"""Typer-based command line interface for Scrubby."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

import structlog
import typer

from ..clipboard import SystemClipboard
from ..config import AppConfig, load_config
from ..exceptions import ClipboardError, ConfigError, FeatureUnavailable
from ..features import Feature, FeatureSet, features_for
from ..license import current_device_id, verify_license
from ..logging import configure_logging
from ..models import RedactionResult
from ..redactor import sanitize
from ..report import format_summary, json_report
from ..scanner import Scanner
from ..watch import ClipboardWatcher

app = typer.Typer(help="Scrub emails, IPs, UUIDs, JWTs and secrets from text before pasting it into AI tools.")

logger = structlog.get_logger(__name__)

EXIT_USAGE = 1
EXIT_READ = 2
EXIT_WRITE = 3
EXIT_LICENSE = 3


@dataclass(slots=True)
class CliState:
    config: AppConfig
    features: FeatureSet
    scanner: Scanner


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", metavar="PATH", help="Load detector rules from a YAML file (Pro)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="critical|error|warning|info|debug"),
) -> None:
    configure_logging(log_level)
    features = features_for(verify_license())
    app_config = AppConfig()
    if config is not None:
        _require(features, Feature.CONFIG_RULES)
        try:
            app_config = load_config(config)
        except ConfigError as exc:
            _fail(str(exc), EXIT_USAGE)
        if log_level is None:
            configure_logging(app_config.logging.normalized_level())
    ctx.obj = CliState(
        config=app_config,
        features=features,
        scanner=Scanner(config=app_config.detectors.scanner_config()),
    )
    if ctx.invoked_subcommand is None:
        _run_clipboard(ctx.obj, json_output=False, stable=False)


@app.command()
def clipboard(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print a JSON report instead of the text summary (Pro)"),
    stable: bool = typer.Option(False, "--stable", help="Use numbered placeholders such as <EMAIL_1> (Pro)"),
) -> None:
    """Sanitize the current clipboard text in place."""
    _run_clipboard(ctx.obj, json_output=json_output, stable=stable)


@app.command()
def watch(
    ctx: typer.Context,
    interval_ms: Optional[int] = typer.Option(None, "--interval-ms", min=100, help="Poll interval (default 750)"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON reports (Pro)"),
    stable: bool = typer.Option(False, "--stable", help="Use numbered placeholders (Pro)"),
) -> None:
    """Watch the clipboard and sanitize it whenever it changes (experimental)."""
    state: CliState = ctx.obj
    as_json, use_stable = _resolve_output(state, json_output, stable)
    interval = interval_ms if interval_ms is not None else state.config.scrub.interval_ms
    try:
        board = SystemClipboard()
    except ClipboardError as exc:
        _fail(str(exc), EXIT_READ)
    watcher = ClipboardWatcher(
        board,
        interval=interval / 1000,
        stable=use_stable,
        scanner=state.scanner,
        on_redacted=lambda result: _report(result, as_json),
    )
    stop = threading.Event()
    try:
        watcher.run(stop)
    except KeyboardInterrupt:
        stop.set()
    except ClipboardError as exc:
        _fail(str(exc), EXIT_READ)


@app.command()
def stdin(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Write a JSON report to stderr (Pro)"),
    stable: bool = typer.Option(False, "--stable", help="Use numbered placeholders (Pro)"),
) -> None:
    """Sanitize standard input and print the result (Pro)."""
    state: CliState = ctx.obj
    _require(state.features, Feature.FILE_INPUT)
    as_json, use_stable = _resolve_output(state, json_output, stable)
    data = typer.get_binary_stream("stdin").read()
    _emit_stream(sanitize(data, stable=use_stable, scanner=state.scanner), as_json)


@app.command()
def file(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    json_output: bool = typer.Option(False, "--json", help="Write a JSON report to stderr (Pro)"),
    stable: bool = typer.Option(False, "--stable", help="Use numbered placeholders (Pro)"),
) -> None:
    """Sanitize a file and print the result (Pro)."""
    state: CliState = ctx.obj
    _require(state.features, Feature.FILE_INPUT)
    as_json, use_stable = _resolve_output(state, json_output, stable)
    try:
        data = path.read_bytes()
    except OSError as exc:
        _fail(f"Failed to read {path}: {exc}", EXIT_READ)
    _emit_stream(sanitize(data, stable=use_stable, scanner=state.scanner), as_json)


@app.command("device-id")
def device_id() -> None:
    """Print this machine's device id for license binding."""
    typer.echo(current_device_id())


@app.command("license")
def license_status(ctx: typer.Context) -> None:
    """Show the license verification result and enabled features."""
    state: CliState = ctx.obj
    features = state.features
    typer.echo(f"Plan: {'pro' if features.paid else 'free'}")
    typer.echo(f"Status: {features.reason}")
    enabled = [flag.name.lower() for flag in Feature if flag.name and features.allows(flag)]
    typer.echo(f"Features: {', '.join(enabled)}")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


def _run_clipboard(state: CliState, *, json_output: bool, stable: bool) -> None:
    as_json, use_stable = _resolve_output(state, json_output, stable)
    try:
        board = SystemClipboard()
        text = board.read()
    except ClipboardError as exc:
        _fail(str(exc), EXIT_READ)
    result = sanitize(text, stable=use_stable, scanner=state.scanner)
    try:
        board.write(result.text)  # type: ignore[arg-type]
    except ClipboardError as exc:
        _fail(str(exc), EXIT_WRITE)
    _report(result, as_json)


def _resolve_output(state: CliState, json_output: bool, stable: bool) -> tuple[bool, bool]:
    as_json = json_output or state.config.scrub.json_report
    use_stable = stable or state.config.scrub.stable_placeholders
    if as_json:
        _require(state.features, Feature.JSON_REPORT)
    if use_stable:
        _require(state.features, Feature.STABLE_PLACEHOLDERS)
    if (as_json or use_stable) and state.features.licensed_to:
        typer.echo(f"Scrubby Pro licensed to {state.features.licensed_to}", err=True)
    return as_json, use_stable


def _report(result: RedactionResult, as_json: bool) -> None:
    summary = result.summary()
    typer.echo(json_report(summary) if as_json else format_summary(summary))


def _emit_stream(result: RedactionResult, as_json: bool) -> None:
    out = typer.get_binary_stream("stdout")
    out.write(result.text if isinstance(result.text, bytes) else result.text.encode("utf-8"))
    out.flush()
    if as_json:
        typer.echo(json_report(result.summary()), err=True)


def _require(features: FeatureSet, feature: Feature) -> None:
    try:
        features.require(feature)
    except FeatureUnavailable as exc:
        logger.info("feature.denied", feature=exc.feature)
        _fail(str(exc), EXIT_LICENSE)


def _fail(message: str, code: int) -> NoReturn:
    typer.echo(f"Scrubby error: {message}", err=True)
    raise typer.Exit(code=code)


if __name__ == "__main__":  # pragma: no cover
    app()
