"""Command-line tools for inspecting serialized service error envelopes."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from packages.service_errors.codec import ErrorCodec, ErrorCodecError
from packages.service_errors.config import load_settings
from packages.service_errors.errors import OpaqueError, ServiceError
from packages.service_errors.logging import configure_logging, get_logger

SUCCESS_EXIT_CODE = 0
CODEC_ERROR_EXIT_CODE = 3

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options shared by every command."""

    codec: ErrorCodec
    as_json: bool


def render_chain(error: ServiceError, codec: ErrorCodec) -> str:
    """Return one line per link of ``error``'s cause chain, outermost first."""
    lines: list[str] = []
    link: BaseException | None = error
    depth = 0
    while link is not None:
        prefix = "  " * depth + ("caused by " if depth else "")
        lines.append(prefix + _describe(link, codec))
        link = getattr(link, "cause", None)
        depth += 1
    return "\n".join(lines)


def _describe(link: BaseException, codec: ErrorCodec) -> str:
    """Render a single chain link."""
    if isinstance(link, OpaqueError):
        return f"{link.type_name} (unregistered): {link.message}"
    if not isinstance(link, ServiceError):
        return f"{type(link).__qualname__}: {link}"

    entry = codec.registry.entry_for(link)
    tag = entry.tag if entry is not None else type(link).__qualname__
    line = f"{tag} [{link.error_code}]: {link.message}"
    payload = link.payload()
    if payload:
        line += " " + " ".join(f"{key}={value!r}" for key, value in payload.items())
    return line


def _emit_error(exc: Exception, as_json: bool) -> None:
    """Render a codec failure to stderr."""
    if as_json:
        typer.echo(_json_error(exc), err=True)
        return
    typer.echo(f"error: {exc}", err=True)


def _json_error(exc: Exception) -> str:
    body: dict[str, Any] = {"error": str(exc)}
    if isinstance(exc, ErrorCodecError):
        body.update({"stage": exc.stage.value, "path": exc.path})
    return json.dumps(body, separators=(",", ":"))


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


def _read_error(cfg: CliConfig, source: typer.FileText) -> ServiceError:
    """Decode one envelope or exit with the codec failure."""
    try:
        return cfg.codec.loads(source.read())
    except ErrorCodecError as exc:
        _LOGGER.warning("Envelope rejected", exc_info=True)
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=CODEC_ERROR_EXIT_CODE) from exc


app = typer.Typer(no_args_is_help=True, help="Service error envelope tools")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        envvar="SERVICE_ERRORS_CONFIG_FILE",
        help="YAML settings file",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Load settings, configure logging, and build the shared codec."""
    settings = load_settings(config_path=config)
    configure_logging(settings.logging, stream=sys.stderr)
    ctx.obj = CliConfig(codec=ErrorCodec(settings=settings.codec), as_json=as_json)


@app.command("inspect")
def inspect_command(
    ctx: typer.Context,
    source: typer.FileText = typer.Argument(..., help="Envelope JSON file, or -"),
) -> None:
    """Decode an envelope and print its cause chain."""
    cfg = _require_config(ctx)
    error = _read_error(cfg, source)
    if cfg.as_json:
        typer.echo(cfg.codec.dumps(error))
    else:
        typer.echo(render_chain(error, cfg.codec))
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


@app.command("check")
def check_command(
    ctx: typer.Context,
    source: typer.FileText = typer.Argument(..., help="Envelope JSON file, or -"),
) -> None:
    """Exit non-zero when an envelope cannot be decoded."""
    cfg = _require_config(ctx)
    _read_error(cfg, source)
    typer.echo('{"ok":true}' if cfg.as_json else "ok")
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


if __name__ == "__main__":
    app()
