"""
Command-line interface for querystruct.

Encodes a dataclass or pydantic model, built from JSON arguments, into a
query string.
"""

import importlib
import json
import sys
from typing import Any, Optional

import typer
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.config import get_config
from .core.encoder import Encoder
from .core.fields import is_struct_type
from .exceptions import MultiError, StructuralError
from .utils.logging import setup_logging
from .utils.rich_logging import console as themed_console
from .utils.rich_logging import setup_rich_logging

app = typer.Typer(
    name="querystruct",
    help="Encode dataclasses and pydantic models as URL query strings",
    add_completion=False,
)

console = Console()


@app.callback()
def main_callback():
    """Configure logging before any command runs."""
    config = get_config()
    setup_logging()
    if config.rich_tracebacks:
        setup_rich_logging()


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold cyan]querystruct[/bold cyan] version {__version__}")


def load_struct_type(target: str) -> type:
    """
    Import a struct class from "package.module:ClassName".

    Raises:
        typer.BadParameter: If the target is malformed or not a struct class
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise typer.BadParameter(f"expected MODULE:CLASS, got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"cannot import {module_name!r}: {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise typer.BadParameter(f"{module_name!r} has no attribute {attr_path!r}") from e

    if not is_struct_type(obj):
        raise typer.BadParameter(f"{target!r} is not a dataclass or pydantic model")
    return obj


@app.command()
def encode(
    target: str = typer.Argument(..., help="Struct class as MODULE:CLASS"),
    data: str = typer.Option("{}", "--data", "-d", help="JSON object of field values"),
    tag: Optional[str] = typer.Option(None, "--tag", help="Metadata key for field aliases"),
    show_values: bool = typer.Option(
        False, "--show-values", help="Print the key/values table instead of the query string"
    ),
):
    """
    Build TARGET from --data and print its query string.

    Examples:
        querystruct encode myapp.forms:Search -d '{"q": "books"}'
        querystruct encode myapp.forms:Search -d '{"q": "books"}' --show-values
    """
    struct_type = load_struct_type(target)

    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]❌ Invalid JSON:[/bold red] {escape(str(e))}")
        sys.exit(1)

    try:
        value = TypeAdapter(struct_type).validate_python(payload)
    except PydanticValidationError as e:
        console.print(f"[bold red]❌ Cannot build {struct_type.__name__}:[/bold red]")
        console.print(escape(str(e)))
        sys.exit(1)

    encoder = Encoder(alias_tag=tag)
    try:
        values = encoder.encode_values(value)
        errors = MultiError()
    except StructuralError as e:
        console.print(f"[bold red]❌ {escape(e.user_message)}[/bold red]")
        sys.exit(1)
    except MultiError as e:
        values, errors = e.partial, e

    if show_values:
        themed_console.print_values(values.values(), values.keys())
    else:
        typer.echo(values.encode())

    if errors:
        themed_console.print_errors(errors)
        sys.exit(1)


@app.command()
def config():
    """Show the effective configuration."""
    settings = get_config()

    table = Table(title="Configuration", show_header=False, border_style="cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="yellow")

    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))

    console.print(table)


if __name__ == "__main__":
    app()
