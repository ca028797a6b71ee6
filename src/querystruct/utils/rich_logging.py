"""Rich console output for the querystruct CLI"""

from collections.abc import Mapping
from typing import Optional

import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from ..exceptions import QuerystructError

QUERYSTRUCT_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "key": "cyan",
        "value": "yellow",
    }
)


class QuerystructConsole:
    """Singleton console with the querystruct theme"""

    _instance: Optional["QuerystructConsole"] = None

    def __new__(cls) -> "QuerystructConsole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "initialized"):
            self.console = Console(theme=QUERYSTRUCT_THEME)
            self.initialized = True

    def print_values(self, values: Mapping[str, list[str]], keys: list[str] | None = None):
        """Print a multi-map as a key/values table"""
        table = Table(title="Encoded Values", show_header=True, border_style="cyan")
        table.add_column("Key", style="key", no_wrap=True)
        table.add_column("Values", style="value")

        for key in keys if keys is not None else list(values):
            table.add_row(escape(key), escape(", ".join(values[key])) or "[dim](empty)[/dim]")

        self.console.print(table)

    def print_errors(self, errors: Mapping[str, Exception]):
        """Print per-type encode failures"""
        table = Table(title="Encode Errors", show_header=True, border_style="red")
        table.add_column("Type", style="key", no_wrap=True)
        table.add_column("Error", style="error")

        for type_name, error in errors.items():
            message = error.message if isinstance(error, QuerystructError) else str(error)
            table.add_row(escape(type_name), escape(message))

        self.console.print(table)

    def print_success(self, message: str):
        self.console.print(f"[success]✓[/success] {message}")

    def print_error(self, message: str):
        self.console.print(f"[error]✗[/error] {message}")

    def print_warning(self, message: str):
        self.console.print(f"[warning]⚠[/warning] {message}")


# Global console instance
console = QuerystructConsole()


def setup_rich_logging() -> None:
    """
    Install Rich's traceback handler globally.

    Note: structlog configuration is handled separately in utils/logging.py.
    """
    install_rich_traceback(
        show_locals=False,
        width=120,
        extra_lines=3,
        theme="monokai",
        word_wrap=False,
        suppress=[structlog],
    )
