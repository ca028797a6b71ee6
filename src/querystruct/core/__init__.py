"""
Core components of querystruct.
"""

from .config import QuerystructConfig, get_config, reset_config
from .encoder import Encoder
from .fields import FieldAlias, StructField, TagOptions, field_alias, is_zero, parse_tag
from .registry import EncoderFunc, EncoderRegistry

__all__ = [
    "Encoder",
    "EncoderRegistry",
    "EncoderFunc",
    "FieldAlias",
    "StructField",
    "TagOptions",
    "field_alias",
    "parse_tag",
    "is_zero",
    "QuerystructConfig",
    "get_config",
    "reset_config",
]
