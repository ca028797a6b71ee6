"""
Pytest configuration and shared fixtures.
"""

from dataclasses import dataclass, field
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from querystruct import Encoder, UrlValues
from querystruct.core.config import reset_config


@dataclass
class Address:
    street: str = field(default="", metadata={"schema": "street"})
    city: str = field(default="", metadata={"schema": "city,omitempty"})


@dataclass
class Person:
    name: str = field(metadata={"schema": "name"})
    age: int = field(default=0, metadata={"schema": "age,omitempty"})
    tags: list[str] = field(default_factory=list, metadata={"schema": "tag"})
    address: Optional[Address] = None
    secret: str = field(default="hidden", metadata={"schema": "-"})


class SearchModel(BaseModel):
    query: str = Field(json_schema_extra={"schema": "q"})
    page: int = Field(default=0, json_schema_extra={"schema": "page,omitempty"})
    sort: Optional[str] = None
    filters: list[str] = Field(default_factory=list, json_schema_extra={"schema": "f"})


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate every test from ambient QUERYSTRUCT_* settings."""
    for var in ("QUERYSTRUCT_ALIAS_TAG", "QUERYSTRUCT_LOG_LEVEL", "QUERYSTRUCT_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def encoder():
    """Encoder with default registry and alias tag."""
    return Encoder()


@pytest.fixture
def values():
    """Empty ordered collector."""
    return UrlValues()


@pytest.fixture
def sample_person():
    return Person(
        name="Ada",
        age=36,
        tags=["math", "engines"],
        address=Address(street="1 Analytical Way", city="London"),
    )


@pytest.fixture
def sample_search():
    return SearchModel(query="books", filters=["new", "used"])
