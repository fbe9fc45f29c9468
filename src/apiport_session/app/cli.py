from __future__ import annotations

import enum
import json
import logging
import uuid
from pathlib import Path

import httpx
import typer
from dotenv import load_dotenv

from .config import AppConfig
from .cli_formatter import format_options, format_reporting_result, result_to_dict
from .main import analyze as run_analysis, resolve_options
from ..core.domain.exceptions import ApiPortSessionError

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


class LogLevel(str, enum.Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def _with_overrides(config: AppConfig, *, options_file: Path | None, **logging_updates: object) -> AppConfig:
    updates: dict[str, object] = {"logging": config.logging.model_copy(update=logging_updates)}
    if options_file is not None:
        updates["options"] = config.options.model_copy(update={"options_file": options_file})
    return config.model_copy(update=updates)


@app.command()
def analyze(
    entrypoint: str = typer.Argument(..., help="Root artifact to analyze, e.g., app.dll"),
    assemblies: list[Path] = typer.Argument(None, help="Input assembly paths (defaults to the entrypoint)"),
    package: list[str] = typer.Option(None, "--package", "-p", help="Referenced package identifier (repeatable)"),
    json_report: bool = typer.Option(False, "--json-report", help="Also write a JSON report"),
    options_file: Path | None = typer.Option(None, "--options-file", help="Options JSON document"),
    log_level: LogLevel = typer.Option(LogLevel.INFO, "--log-level", help="Log level", case_sensitive=False),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Analyze assemblies for portability and open the generated reports."""
    logging.basicConfig(level=getattr(logging, log_level.value), format='%(levelname)s: %(message)s', force=True)

    if options_file is not None and not options_file.exists():
        typer.echo(f"Error: options file not found: {options_file}", err=True)
        raise typer.Exit(code=2)

    session_id = f"session-{uuid.uuid4().hex[:12]}"
    config = _with_overrides(
        AppConfig(),
        options_file=options_file,
        session_id=session_id,
        level=log_level.value,
    )
    typer.echo(f"Log file: {config.directories.logs_dir / f'{session_id}.jsonl'}", err=True)

    paths = [str(p) for p in assemblies] if assemblies else [entrypoint]
    try:
        result = run_analysis(
            entrypoint,
            paths,
            installed_packages=package or (),
            include_json=json_report,
            config=config,
        )
    except (ApiPortSessionError, httpx.TransportError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(json.dumps(result_to_dict(result), ensure_ascii=False, indent=2, default=str))
    else:
        typer.echo(format_reporting_result(result))


@app.command()
def options(
    options_file: Path | None = typer.Option(None, "--options-file", help="Options JSON document"),
):
    """Show the resolved analysis options."""
    config = _with_overrides(AppConfig(), options_file=options_file)
    try:
        snapshot = resolve_options(config)
    except ApiPortSessionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_options(snapshot))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
