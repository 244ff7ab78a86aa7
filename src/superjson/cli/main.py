"""Main CLI entry point for superjson.

Provides commands to inspect and reformat documents containing tagged values.
"""

import os
import sys
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from superjson.config import CodecConfig, parse_handler_names
from superjson.markers import StringKind
from superjson.utils import dumps, loads

# Global console for Rich output
console = Console()


def load_config(
    config_path: Optional[str] = None,
    marker: Optional[str] = None,
    handlers: Optional[str] = None,
) -> CodecConfig:
    """Build the codec configuration from multiple sources.

    Priority:
    1. Explicit --marker/--handlers flags
    2. Explicit --config file, or SUPERJSON_CONFIG environment variable
    3. SUPERJSON_* environment variables
    4. Defaults

    Args:
        config_path: Config file path from CLI context
        marker: Marker override
        handlers: Comma-separated handler names override

    Returns:
        CodecConfig instance

    Raises:
        click.ClickException: If an explicit config file does not exist
    """
    config_path = config_path or os.environ.get("SUPERJSON_CONFIG")
    if config_path:
        if not Path(config_path).exists():
            raise click.ClickException(f"Config file not found: {config_path}")
        config = CodecConfig.load(config_path)
    else:
        config = CodecConfig.from_env()

    if marker is None and handlers is None:
        return config

    return CodecConfig(
        marker=marker if marker is not None else config.marker,
        handlers=(
            parse_handler_names(handlers) if handlers is not None else config.handlers
        ),
        indent=config.indent,
    )


def iter_strings(value: Any, path: str = "$") -> Iterator[Tuple[str, str]]:
    """Yield (JSON path, string) pairs for every string in a decoded tree."""
    if isinstance(value, str):
        yield path, value
    elif isinstance(value, dict):
        for key, item in value.items():
            yield from iter_strings(item, f"{path}.{key}")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from iter_strings(item, f"{path}[{index}]")


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(),
    help="Path to a JSON config file (default: SUPERJSON_CONFIG env var)",
)
@click.option("--marker", "-m", help="Tag marker (default: #!)")
@click.option(
    "--handlers",
    "-H",
    help="Comma-separated built-in handlers to install (default: Date,RegExp)",
)
@click.pass_context
def cli(ctx, config, marker, handlers):
    """superjson CLI - Inspect and reformat JSON with tagged values.

    Use --config/-c to load settings from a file, or set SUPERJSON_MARKER,
    SUPERJSON_HANDLERS and SUPERJSON_INDENT environment variables.
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["marker"] = marker
    ctx.obj["handlers"] = handlers


def _get_config(ctx) -> CodecConfig:
    return load_config(
        ctx.obj.get("config"), ctx.obj.get("marker"), ctx.obj.get("handlers")
    )


@cli.command("inspect")
@click.argument("file", type=click.File("r"))
@click.pass_context
def inspect_command(ctx, file):
    """List the tagged values in a document.

    Every tagged string is shown with its location, handler name, and the
    value it decodes to. Tags that do not decode are marked as literal.

    Example:
        superjson inspect data.json
        superjson -H Date,Symbol inspect data.json
    """
    try:
        config = _get_config(ctx)
        codec = config.create_codec()
        raw = loads(file.read())

        rows: List[Tuple[str, str, str, str]] = []
        for path, text in iter_strings(raw):
            kind, match = codec.syntax.classify(text)
            if kind is not StringKind.TAGGED:
                continue
            value = codec.parse(dumps(text))
            status = "literal" if value == text else "revived"
            rows.append((path, match.group(2), repr(value), status))

        if not rows:
            console.print("[yellow]No tagged values found[/yellow]")
            return

        table = Table(title=f"Tagged values ({len(rows)})")
        table.add_column("Path", style="cyan", no_wrap=True)
        table.add_column("Handler", style="magenta")
        table.add_column("Value", style="white")
        table.add_column("Status", style="green")

        for path, name, value, status in rows:
            style = "green" if status == "revived" else "yellow"
            table.add_row(
                escape(path),
                name,
                escape((value[:60] + "...") if len(value) > 60 else value),
                f"[{style}]{status}[/{style}]",
            )

        console.print(table)

    except click.ClickException:
        raise
    except Exception as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


@cli.command("format")
@click.argument("file", type=click.File("r"))
@click.option(
    "--indent",
    "-i",
    type=int,
    default=None,
    help="Indentation width (default: config indent, compact if unset)",
)
@click.pass_context
def format_command(ctx, file, indent):
    """Decode a document and encode it again.

    Tagged values are revived and re-encoded with the configured handlers, so
    a successful run shows that the document round-trips.

    Example:
        superjson format data.json --indent 2
    """
    try:
        config = _get_config(ctx)
        codec = config.create_codec()
        value = codec.parse(file.read())
        if indent is None:
            indent = config.indent
        click.echo(codec.stringify(value, indent=indent))

    except click.ClickException:
        raise
    except Exception as e:
        console.print(f"[red]✗[/red] Error: {e}", style="red")
        sys.exit(1)


def main():
    """Entry point for the superjson command."""
    cli(obj={})


if __name__ == "__main__":
    main()
