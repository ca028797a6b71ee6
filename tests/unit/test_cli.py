"""
Unit tests for the command-line interface.
"""

import sys
import types
from dataclasses import dataclass, field
from typing import Optional

import pytest
from pydantic import BaseModel, Field
from typer.testing import CliRunner

from querystruct import __version__
from querystruct.cli import app

runner = CliRunner()


@dataclass
class Address:
    street: str = ""


@dataclass
class Order:
    id: int
    items: list[str] = field(default_factory=list, metadata={"schema": "item"})
    note: str = field(default="", metadata={"schema": "note,omitempty", "form": "n"})
    shipping: Optional[Address] = None


@dataclass
class Report:
    title: str = "r"
    extra: dict[str, int] = field(default_factory=dict)


class Query(BaseModel):
    q: str
    page: int = Field(default=1, json_schema_extra={"schema": "p"})


@pytest.fixture
def struct_module(monkeypatch):
    """Expose the sample structs as an importable module."""
    module = types.ModuleType("cli_structs")
    module.Order = Order
    module.Report = Report
    module.Query = Query
    module.not_a_struct = 42
    monkeypatch.setitem(sys.modules, "cli_structs", module)
    return module


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestEncodeCommand:
    """Tests for `querystruct encode`."""

    def test_encode_dataclass(self, struct_module):
        """A dataclass is built from JSON and printed as a query string."""
        result = runner.invoke(
            app,
            [
                "encode",
                "cli_structs:Order",
                "--data",
                '{"id": 7, "items": ["a", "b"], "shipping": {"street": "Elm St"}}',
            ],
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == "id=7&item=a&item=b&street=Elm+St"

    def test_encode_model(self, struct_module):
        """Pydantic models are validated and encoded."""
        result = runner.invoke(app, ["encode", "cli_structs:Query", "-d", '{"q": "x y"}'])

        assert result.exit_code == 0
        assert result.stdout.strip() == "q=x+y&p=1"

    def test_alias_tag_option(self, struct_module):
        """--tag selects another metadata key."""
        result = runner.invoke(
            app,
            ["encode", "cli_structs:Order", "-d", '{"id": 1, "note": "hi"}', "--tag", "form"],
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == "id=1&n=hi&shipping=null"

    def test_show_values(self, struct_module):
        """--show-values prints a table of keys and values."""
        result = runner.invoke(
            app, ["encode", "cli_structs:Order", "-d", '{"id": 3, "items": ["a"]}', "--show-values"]
        )

        assert result.exit_code == 0
        assert "Encoded Values" in result.stdout
        assert "item" in result.stdout

    def test_field_errors_exit_nonzero(self, struct_module):
        """Partial output is printed along with the error table."""
        result = runner.invoke(app, ["encode", "cli_structs:Report"])

        assert result.exit_code == 1
        assert "title=r" in result.stdout
        assert "Encode Errors" in result.stdout

    def test_invalid_json(self, struct_module):
        result = runner.invoke(app, ["encode", "cli_structs:Order", "-d", "{not json"])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_validation_failure(self, struct_module):
        result = runner.invoke(app, ["encode", "cli_structs:Order", "-d", '{"id": "abc"}'])

        assert result.exit_code == 1
        assert "Cannot build Order" in result.stdout

    @pytest.mark.parametrize(
        "target",
        ["cli_structs", "cli_structs:Missing", "cli_structs:not_a_struct", "no_such_module:X"],
    )
    def test_bad_target(self, struct_module, target):
        """Malformed or non-struct targets are usage errors."""
        result = runner.invoke(app, ["encode", target])

        assert result.exit_code == 2


class TestConfigCommand:
    def test_config_lists_settings(self):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "alias_tag" in result.stdout
        assert "schema" in result.stdout
