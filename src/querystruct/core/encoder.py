"""
Struct Encoder - flattens dataclasses and pydantic models into query values.

Fields are written in declaration order. Nested structs (direct or behind an
Optional) share the parent's key namespace, sequences become repeated keys,
and every field that cannot be encoded is collected into one MultiError
instead of stopping the traversal.
"""

from typing import Any

from ..exceptions import EncoderNotFoundError, FieldEncodeError, MultiError, StructuralError
from ..models.enums import TagOption
from ..models.values import UrlValues
from ..utils.logging import get_logger
from .config import get_config
from .fields import (
    StructField,
    field_alias,
    is_struct,
    is_struct_type,
    is_zero,
    iter_field_values,
    optional_target,
    sequence_element,
    type_name,
)
from .registry import EncoderFunc, EncoderRegistry


class Encoder:
    """
    Encodes struct values into ordered query-string values.

    Example:
        @dataclass
        class Search:
            q: str
            tags: list[str] = field(default_factory=list, metadata={"schema": "tag"})

        encoder = Encoder()
        encoder.encode_values(Search("books", ["new", "used"])).encode()
        # "q=books&tag=new&tag=used"
    """

    def __init__(self, registry: EncoderRegistry | None = None, alias_tag: str | None = None):
        """
        Initialize the encoder.

        Args:
            registry: Encoder registry to use (a fresh one by default)
            alias_tag: Metadata key for field tags (configured default: "schema")
        """
        self.registry = registry if registry is not None else EncoderRegistry()
        self.alias_tag = alias_tag or get_config().alias_tag
        self.logger = get_logger(__name__)

    def set_alias_tag(self, tag: str) -> None:
        """Change the metadata key used to locate field aliases."""
        self.alias_tag = tag

    def register_encoder(self, value: Any, encoder: EncoderFunc) -> None:
        """Register a converter for the concrete type of value."""
        self.registry.register(value, encoder)

    def register_type_encoder(self, tp: Any, encoder: EncoderFunc) -> None:
        """Register a converter under a type annotation."""
        self.registry.register_type(tp, encoder)

    def encode(self, src: Any, dst: UrlValues | dict[str, list[str]]) -> None:
        """
        Encode a struct into dst.

        Args:
            src: Dataclass or pydantic model instance
            dst: UrlValues collector, or a plain dict of lists filled in place

        Raises:
            StructuralError: If src is not a struct
            MultiError: If any field failed; successful fields remain in dst
        """
        errors = self.collect(src, dst)
        if errors:
            raise errors

    def encode_values(self, src: Any) -> UrlValues:
        """
        Encode a struct into a new UrlValues that keeps field order.

        Raises:
            StructuralError: If src is not a struct
            MultiError: If any field failed; the partial output is on
                the error's ``partial`` attribute
        """
        values = UrlValues()
        errors = self.collect(src, values)
        if errors:
            errors.partial = values
            raise errors
        return values

    def collect(self, src: Any, dst: UrlValues | dict[str, list[str]]) -> MultiError:
        """
        Encode a struct into dst and return the per-field errors.

        Returns:
            MultiError, empty when every field was encoded

        Raises:
            StructuralError: If src is not a struct
        """
        values = dst if isinstance(dst, UrlValues) else UrlValues.from_mapping(dst)
        if not is_struct(src):
            raise StructuralError(src)

        errors = self._encode(src, values)

        self.logger.debug(
            "struct_encoded",
            struct=type_name(type(src)),
            keys=len(values),
            errors=len(errors),
        )
        return errors

    def _encode(self, src: Any, values: UrlValues) -> MultiError:
        errors = MultiError()

        for field, value in iter_field_values(src, self.alias_tag):
            name, options = field_alias(field)
            if name == "-":
                continue

            tp = field.annotation
            if tp is Any:
                tp = type(value)

            # Non-null struct pointers flatten into the parent namespace.
            if (
                value is not None
                and optional_target(tp) is not None
                and is_struct(value)
                and not self.registry.has_custom_encoder(tp)
            ):
                self._encode_nested(value, values, errors)
                continue

            encoder = self.registry.resolve(tp)

            if encoder is not None:
                if options.contains(TagOption.OMITEMPTY) and is_zero(value, tp):
                    continue
                encoded = self._apply(encoder, value, field, tp, errors)
                if encoded is not None:
                    values.append(name, encoded)
                continue

            if is_struct_type(tp) and is_struct(value):
                self._encode_nested(value, values, errors)
                continue

            element = sequence_element(tp)
            target = optional_target(tp)
            if element is None and target is not None:
                element = sequence_element(target)
                if element is not None and value is None:
                    if not options.contains(TagOption.OMITEMPTY):
                        values.append(name, "null")
                    continue
            if element is not None:
                encoder = self.registry.resolve(element)

            if encoder is None:
                self._record(errors, tp, EncoderNotFoundError(type_name(tp), field.name, value))
                continue

            if not value and options.contains(TagOption.OMITEMPTY):
                continue

            encoded_items = []
            for item in value or ():
                encoded = self._apply(encoder, item, field, tp, errors)
                if encoded is None:
                    break
                encoded_items.append(encoded)
            else:
                values.replace(name, encoded_items)

        return errors

    def _encode_nested(self, value: Any, values: UrlValues, errors: MultiError) -> None:
        nested = self._encode(value, values)
        if nested:
            self._record(errors, type(value), nested)

    def _apply(
        self,
        encoder: EncoderFunc,
        value: Any,
        field: StructField,
        tp: Any,
        errors: MultiError,
    ) -> str | None:
        try:
            return encoder(value)
        except (TypeError, ValueError, ArithmeticError) as e:
            error = FieldEncodeError(
                f"querystruct: encoder failed for {value!r}: {e}",
                type_name=type_name(tp),
                field=field.name,
            )
            error.__cause__ = e
            self._record(errors, tp, error)
            return None

    def _record(self, errors: MultiError, tp: Any, error: Exception) -> None:
        key = type_name(tp)
        self.logger.debug(
            "field_encode_failed",
            type=key,
            error_type=type(error).__name__,
            error=str(error),
        )
        errors.add(key, error)
