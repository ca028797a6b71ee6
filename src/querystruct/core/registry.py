"""
Scalar encoder registry.

Maps a field's declared type to a function producing its string form.
Caller registrations win over the built-ins, which dispatch on kind:

    bool   -> "true" / "false"
    int    -> base-10 decimal
    float  -> fixed point, 6 digits after the decimal point
    str    -> unchanged
    T | None -> "null" for None, otherwise the encoder of T

Registering is meant for a setup phase; lookups are safe to share between
threads once registration has finished.
"""

from collections.abc import Callable
from typing import Any

from .fields import is_struct_type, optional_target

EncoderFunc = Callable[[Any], str]

FLOAT_PRECISION = 6


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def encode_int(value: int) -> str:
    return str(int(value))


def encode_float(value: float) -> str:
    return f"{float(value):.{FLOAT_PRECISION}f}"


def encode_string(value: str) -> str:
    # str.__str__ skips overrides on subclasses such as (str, Enum)
    return str.__str__(value)


# bool must precede int: bool is an int subclass
BUILTIN_ENCODERS: tuple[tuple[type, EncoderFunc], ...] = (
    (bool, encode_bool),
    (int, encode_int),
    (float, encode_float),
    (str, encode_string),
)


def _null_pointer(value: Any) -> str:
    if value is None:
        return "null"
    raise TypeError(f"no encoder for pointee of type {type(value).__name__}")


def pointer_encoder(target: EncoderFunc) -> EncoderFunc:
    """Wrap an encoder so None renders as "null"."""

    def encode_pointer(value: Any) -> str:
        if value is None:
            return "null"
        return target(value)

    return encode_pointer


class EncoderRegistry:
    """
    Lookup table of encoder functions keyed by type.

    Example:
        registry = EncoderRegistry()
        registry.register(Money(0), lambda m: f"{m / 100:.2f}")
        registry.resolve(Money)(Money(250))  # "2.50"
    """

    def __init__(self):
        self._encoders: dict[Any, EncoderFunc] = {}

    def register(self, value: Any, encoder: EncoderFunc) -> None:
        """
        Register an encoder for the concrete type of an example value.

        Args:
            value: Any instance of the type to encode
            encoder: Function returning the string form of such values
        """
        self.register_type(type(value), encoder)

    def register_type(self, tp: Any, encoder: EncoderFunc) -> None:
        """
        Register an encoder under a type or annotation.

        Use this for annotations no example value can stand for, such as
        Optional[Money] or list[Money].
        """
        self._encoders[tp] = encoder

    def has_custom_encoder(self, tp: Any) -> bool:
        return tp in self._encoders

    def resolve(self, tp: Any) -> EncoderFunc | None:
        """
        Find the encoder for a type.

        Args:
            tp: Declared type or annotation of a field

        Returns:
            Encoder function, or None when the type has no string form
        """
        custom = self._encoders.get(tp)
        if custom is not None:
            return custom

        if isinstance(tp, type):
            for kind, encoder in BUILTIN_ENCODERS:
                try:
                    if issubclass(tp, kind):
                        return encoder
                except TypeError:
                    return None
            return None

        target = optional_target(tp)
        if target is not None:
            target_encoder = self.resolve(target)
            if target_encoder is not None:
                return pointer_encoder(target_encoder)
            if is_struct_type(target):
                # Non-null struct pointees are flattened by the encoder.
                return _null_pointer
        return None

    def copy(self) -> "EncoderRegistry":
        clone = EncoderRegistry()
        clone._encoders = dict(self._encoders)
        return clone

    def __contains__(self, tp: Any) -> bool:
        return self.has_custom_encoder(tp)

    def __len__(self) -> int:
        return len(self._encoders)
