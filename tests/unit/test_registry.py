"""
Unit tests for the scalar encoder registry.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

import pytest

from querystruct.core.registry import EncoderRegistry


class Money(int):
    """Amount in cents."""


class Color(IntEnum):
    RED = 1
    GREEN = 2


class Shade(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Label(str):
    def __str__(self):
        return f"<label {self!r}>"


@dataclass
class Point:
    x: int = 0


@pytest.fixture
def registry():
    return EncoderRegistry()


class TestBuiltinEncoders:
    """Tests for kind-based built-in encoders."""

    @pytest.mark.parametrize(
        "tp, value, expected",
        [
            (bool, True, "true"),
            (bool, False, "false"),
            (int, -42, "-42"),
            (int, 0, "0"),
            (float, 1.5, "1.500000"),
            (float, -0.1234567, "-0.123457"),
            (float, 3.0, "3.000000"),
            (str, "hello world", "hello world"),
        ],
    )
    def test_scalar_kinds(self, registry, tp, value, expected):
        """Each scalar kind renders to its canonical string."""
        assert registry.resolve(tp)(value) == expected

    def test_subclasses_use_kind_encoder(self, registry):
        """int subclasses fall back to the int encoder."""
        assert registry.resolve(Money)(Money(250)) == "250"
        assert registry.resolve(Color)(Color.GREEN) == "2"

    def test_str_subclasses_encode_underlying_text(self, registry):
        """str subclasses render their value, not their __str__."""
        assert registry.resolve(Shade)(Shade.DARK) == "dark"
        assert registry.resolve(Label)(Label("x")) == "x"

    def test_bool_is_not_encoded_as_int(self, registry):
        """bool resolves to the bool encoder despite subclassing int."""
        assert registry.resolve(bool)(True) == "true"

    def test_encoding_is_deterministic(self, registry):
        """The same input always yields the same string."""
        encode = registry.resolve(float)
        assert {encode(0.1) for _ in range(10)} == {"0.100000"}

    @pytest.mark.parametrize("tp", [dict, list, bytes, Point, Any, dict[str, int], list[int]])
    def test_no_builtin_for_other_types(self, registry, tp):
        """Containers, structs and Any have no scalar encoder."""
        assert registry.resolve(tp) is None


class TestPointerEncoders:
    """Tests for Optional[T] encoders."""

    def test_none_renders_null(self, registry):
        """A null pointer renders as the literal "null"."""
        assert registry.resolve(Optional[int])(None) == "null"

    def test_value_matches_direct_encoding(self, registry):
        """A present pointer renders like its pointee."""
        direct = registry.resolve(float)(2.5)
        assert registry.resolve(Optional[float])(2.5) == direct
        assert registry.resolve(float | None)(2.5) == direct

    def test_pointer_to_custom_type(self, registry):
        """Pointers wrap registered pointee encoders."""
        registry.register(Money(0), lambda m: f"${m / 100:.2f}")
        encode = registry.resolve(Optional[Money])

        assert encode(Money(199)) == "$1.99"
        assert encode(None) == "null"

    def test_pointer_to_struct_renders_null(self, registry):
        """A null struct pointer still has a "null" form."""
        assert registry.resolve(Optional[Point])(None) == "null"

    def test_pointer_to_unencodable_type(self, registry):
        """Pointers to types without encoders are unresolvable."""
        assert registry.resolve(Optional[dict]) is None

    def test_multi_member_union_unresolvable(self, registry):
        """Only T | None is a pointer; wider unions have no encoder."""
        assert registry.resolve(int | str | None) is None


class TestRegistration:
    """Tests for caller-registered encoders."""

    def test_registered_encoder_overrides_builtin(self, registry):
        """Registered encoders win over the kind built-in."""
        registry.register(Money(0), lambda m: f"{m / 100:.2f}")

        assert registry.resolve(Money)(Money(1050)) == "10.50"
        assert registry.resolve(int)(1050) == "1050"

    def test_later_registration_replaces_earlier(self, registry):
        """Registering the same type twice keeps the latest encoder."""
        registry.register(Money(0), lambda m: "first")
        registry.register(Money(5), lambda m: "second")

        assert registry.resolve(Money)(Money(1)) == "second"
        assert len(registry) == 1

    def test_register_is_keyed_by_concrete_type(self, registry):
        """An example value only registers its exact type."""
        registry.register(Color.RED, lambda c: c.name.lower())

        assert registry.resolve(Color)(Color.GREEN) == "green"
        assert registry.resolve(int)(3) == "3"

    def test_register_type_annotation(self, registry):
        """Annotations can be registered directly."""
        registry.register_type(list[int], lambda xs: ",".join(map(str, xs)))

        assert registry.resolve(list[int])([1, 2]) == "1,2"
        assert registry.has_custom_encoder(list[int])
        assert list[int] in registry
        assert not registry.has_custom_encoder(list[str])

    def test_has_custom_encoder_ignores_builtins(self, registry):
        """Built-ins do not count as custom encoders."""
        assert not registry.has_custom_encoder(int)

    def test_copy_is_independent(self, registry):
        """A copied registry does not see later registrations."""
        registry.register(Money(0), lambda m: "money")
        clone = registry.copy()
        registry.register_type(Point, lambda p: "point")

        assert clone.resolve(Money)(Money(1)) == "money"
        assert clone.resolve(Point) is None
