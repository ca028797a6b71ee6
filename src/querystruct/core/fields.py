"""
Field metadata for struct-like values.

A "struct" is an instance of a dataclass or a pydantic model. Each field
carries an optional tag under a configurable metadata key, written as
"name,option,option"; an empty name falls back to the field's identifier and
the name "-" excludes the field.

    @dataclass
    class Query:
        term: str = field(metadata={"schema": "q"})
        page: int = field(default=0, metadata={"schema": "page,omitempty"})
"""

import dataclasses
import types
import typing
from collections.abc import Iterator, MutableSequence, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple, Union

from pydantic import BaseModel

from ..models.enums import TagOption

NoneType = type(None)

_SEQUENCE_ORIGINS = (list, tuple, Sequence, MutableSequence)


class TagOptions(tuple):
    """Options parsed from a field tag, e.g. ("omitempty",)."""

    def contains(self, option: str | TagOption) -> bool:
        return str(option) in self


class FieldAlias(NamedTuple):
    name: str
    options: TagOptions


@dataclass(frozen=True)
class StructField:
    """One field of a struct together with its declared type and tag."""

    name: str
    annotation: Any
    tag: str | None

    def alias(self) -> FieldAlias:
        return field_alias(self)


def parse_tag(tag: str) -> FieldAlias:
    """Split "name,opt1,opt2" into the name and its options."""
    name, *options = tag.split(",")
    return FieldAlias(name, TagOptions(options))


def field_alias(field: StructField) -> FieldAlias:
    """
    Resolve the output key and options for a field.

    Args:
        field: Field to resolve

    Returns:
        FieldAlias whose name defaults to the field identifier
    """
    name, options = "", TagOptions()
    if field.tag:
        name, options = parse_tag(field.tag)
    if not name:
        name = field.name
    return FieldAlias(name, options)


def is_struct_type(tp: Any) -> bool:
    if not isinstance(tp, type) or typing.get_origin(tp) is not None:
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def is_struct(value: Any) -> bool:
    return is_struct_type(type(value))


def _dataclass_tag(f: dataclasses.Field, tag_name: str) -> str | None:
    return f.metadata.get(tag_name)


def _model_tag(info: Any, tag_name: str) -> str | None:
    extra = info.json_schema_extra
    if isinstance(extra, dict):
        return extra.get(tag_name)
    return None


def struct_fields(tp: type, tag_name: str) -> list[StructField]:
    """
    List the fields of a struct type in declaration order.

    Args:
        tp: Dataclass or pydantic model class
        tag_name: Metadata key holding field tags

    Returns:
        Fields with their resolved annotations and raw tags
    """
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return [
            StructField(name, info.annotation, _model_tag(info, tag_name))
            for name, info in tp.model_fields.items()
        ]

    try:
        hints = typing.get_type_hints(tp)
    except NameError:
        # Unresolvable forward references (e.g. function-local classes)
        hints = {f.name: f.type for f in dataclasses.fields(tp) if not isinstance(f.type, str)}
    return [
        StructField(f.name, hints.get(f.name, Any), _dataclass_tag(f, tag_name))
        for f in dataclasses.fields(tp)
    ]


def iter_field_values(value: Any, tag_name: str) -> Iterator[tuple[StructField, Any]]:
    for f in struct_fields(type(value), tag_name):
        yield f, getattr(value, f.name)


def optional_target(tp: Any) -> Any | None:
    """Return T for Optional[T] / T | None, else None."""
    if typing.get_origin(tp) not in (Union, types.UnionType):
        return None
    args = [arg for arg in typing.get_args(tp) if arg is not NoneType]
    if len(args) != 1 or len(args) == len(typing.get_args(tp)):
        return None
    return args[0]


def sequence_element(tp: Any) -> Any | None:
    """
    Return the element type of a homogeneous sequence annotation.

    list[T], tuple[T, ...] and Sequence[T] qualify; bare containers yield Any.
    Fixed-shape tuples and str are not sequences here.
    """
    if tp in (list, tuple):
        return Any
    origin = typing.get_origin(tp)
    if origin not in _SEQUENCE_ORIGINS:
        return None
    args = typing.get_args(tp)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    return args[0] if args else Any


def type_name(tp: Any) -> str:
    """Human-readable name for a type or annotation."""
    if isinstance(tp, type) and typing.get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


def is_zero(value: Any, tp: Any = None) -> bool:
    """
    Report whether value is the zero value of its type.

    Structs defer to their own is_zero() when they define one, otherwise every
    field must be zero. Optional values are zero only when None.
    """
    if value is None:
        return True
    if tp is not None and optional_target(tp) is not None:
        return False

    if isinstance(value, (bool, int, float, complex, str, bytes)):
        return not value
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0

    own_check = getattr(value, "is_zero", None)
    if callable(own_check):
        return bool(own_check())

    if is_struct(value):
        return all(
            is_zero(getattr(value, f.name), f.annotation)
            for f in struct_fields(type(value), "")
        )

    try:
        return value == type(value)()
    except TypeError:
        return False
