"""
querystruct - encode dataclasses and pydantic models as URL query strings
"""

from .core.encoder import Encoder
from .core.registry import EncoderRegistry
from .exceptions import (
    EncoderNotFoundError,
    FieldEncodeError,
    MultiError,
    QuerystructError,
    StructuralError,
)
from .models.values import UrlValue, UrlValuePairs, UrlValues

__version__ = "0.1.0"

__all__ = [
    "Encoder",
    "EncoderRegistry",
    "UrlValues",
    "UrlValue",
    "UrlValuePairs",
    "QuerystructError",
    "StructuralError",
    "FieldEncodeError",
    "EncoderNotFoundError",
    "MultiError",
]
