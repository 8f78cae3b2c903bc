"""Main CLI entry point for configunit."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.io.logging_setup import setup_logging
from ..adapters.io.output import ConsoleOutputAdapter, create_output_adapter
from ..application.demo_usecase import DemoUseCase, DemoUseCaseError
from ..config.errors import ConfigurationError
from ..config.loader import ConfigLoader
from ..config.models import AppConfig, resolve_options

logger = logging.getLogger(__name__)


class ClickContext:
    """Context object for Click commands."""

    def __init__(self) -> None:
        self.loader: ConfigLoader | None = None
        self.console: Console = Console()
        self.verbose: bool = False
        self.quiet: bool = False


class NumberType(click.ParamType):
    """Accept an int or a float, keeping ints as ints."""

    name = "number"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> Any:
        if isinstance(value, (int, float)):
            return value
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            self.fail(f"{value!r} is not a number", param, ctx)


NUMBER = NumberType()


def _parse_assignments(assignments: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` strings into a dict, parsing values as YAML scalars."""
    parsed: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'")
        parsed[key.strip()] = yaml.safe_load(raw) if raw else ""
    return parsed


def _load(ctx_obj: ClickContext, cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """Load configuration or exit with status 1."""
    try:
        return ctx_obj.loader.load_config(cli_overrides=cli_overrides, reload=True)
    except ConfigurationError as e:
        ctx_obj.console.print(f"[red]Configuration error:[/] {escape(str(e))}", markup=True)
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING",
)
@click.pass_context
def app(ctx: click.Context, config: Path | None, verbose: bool, quiet: bool) -> None:
    """configunit - build a ConfigurableUnit from layered options and drive it."""
    ctx.ensure_object(ClickContext)
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet
    ctx.obj.loader = ConfigLoader(config)

    if verbose and not quiet:
        setup_logging(logging.DEBUG)
    elif quiet:
        setup_logging(logging.WARNING)
    else:
        setup_logging(logging.INFO)


@app.command()
@click.option("--param1", type=str, help="Override unit.param1")
@click.option("--param2", type=NUMBER, help="Override unit.param2")
@click.option("--increment", "increment_by", type=NUMBER, help="Amount added to param2")
@click.option(
    "--output",
    type=click.Choice(["console", "logging", "null"], case_sensitive=False),
    help="Sink for the unit's output lines",
)
@click.pass_context
def demo(
    ctx: click.Context,
    param1: str | None,
    param2: int | float | None,
    increment_by: int | float | None,
    output: str | None,
) -> None:
    """Run the example flow: increment, read, fetch."""
    overrides: dict[str, Any] = {}
    unit_overrides = {
        k: v for k, v in {"param1": param1, "param2": param2}.items() if v is not None
    }
    if unit_overrides:
        overrides["unit"] = unit_overrides
    if increment_by is not None:
        overrides["increment_by"] = increment_by
    if output:
        overrides["output"] = output.lower()

    config = _load(ctx.obj, overrides)

    if not (ctx.obj.verbose or ctx.obj.quiet):
        logging.getLogger().setLevel(config.log_level)

    if config.output == "console":
        sink = ConsoleOutputAdapter(ctx.obj.console)
    else:
        sink = create_output_adapter(config.output)

    use_case = DemoUseCase(
        output=sink,
        config={
            "unit_options": config.unit.model_dump(),
            "increment_by": config.increment_by,
        },
    )

    try:
        result = asyncio.run(use_case.run())
    except DemoUseCaseError as e:
        ctx.obj.console.print(f"[red]Demo failed:[/] {escape(str(e))}", markup=True)
        logger.error(f"Demo failed: {e}", exc_info=ctx.obj.verbose)
        sys.exit(1)

    logger.debug(f"Demo result: {result}")


@app.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format",
)
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="KEY=VALUE",
    help="Override a unit option (repeatable)",
)
@click.pass_context
def options(ctx: click.Context, output_format: str, assignments: tuple[str, ...]) -> None:
    """Show the effective unit options after merging defaults and overrides."""
    config = _load(ctx.obj)

    overrides = config.unit.model_dump()
    # KEY=null keeps the configured value rather than resetting to the default.
    overrides.update(
        {k: v for k, v in _parse_assignments(assignments).items() if v is not None}
    )

    try:
        effective = resolve_options(overrides)
    except ConfigurationError as e:
        ctx.obj.console.print(f"[red]Configuration error:[/] {escape(str(e))}", markup=True)
        sys.exit(1)

    data = effective.model_dump()

    if output_format.lower() == "json":
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Unit options")
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, repr(value))
    ctx.obj.console.print(table)


@app.command("sample-config")
@click.argument("path", type=click.Path(path_type=Path), default=".configunit.yml")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def sample_config(ctx: click.Context, path: Path, force: bool) -> None:
    """Write a commented sample configuration file."""
    if path.exists() and not force:
        ctx.obj.console.print(
            f"[yellow]{escape(str(path))} already exists; use --force to overwrite[/]", markup=True
        )
        sys.exit(1)

    created = ctx.obj.loader.create_sample_config(path)
    ctx.obj.console.print(f"Created {created}", markup=False, highlight=False)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
