"""
Ordered key/value collectors for query-string output.

UrlValues keeps the order in which keys were first written and lets a key
carry many values, so struct fields render in declaration order and slice
fields render as repeated keys.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from urllib.parse import quote_plus


def _escape(text: str) -> str:
    return quote_plus(text)


class UrlValues:
    """
    Multi-valued mapping of query keys that renders in a custom order.

    Example:
        >>> values = UrlValues()
        >>> values.append("name", "a b")
        >>> values.append("tag", "x")
        >>> values.append("tag", "y")
        >>> values.encode()
        'name=a+b&tag=x&tag=y'
    """

    def __init__(self, values: dict[str, list[str]] | None = None):
        self._keys: list[str] = []
        self._values: dict[str, list[str]] = values if values is not None else {}
        self._keys.extend(self._values)

    @classmethod
    def from_mapping(cls, mapping: dict[str, list[str]]) -> "UrlValues":
        """Wrap an existing multi-map; writes go through to the same dict."""
        return cls(mapping)

    def append(self, key: str, value: str) -> None:
        """Add value under key, recording key order on first sight."""
        if key not in self._values:
            self._keys.append(key)
            self._values[key] = []
        self._values[key].append(value)

    def replace(self, key: str, values: Iterable[str]) -> None:
        """
        Set the values of key, moving the key to the end of the order.

        Args:
            key: Query key
            values: New values, in output order
        """
        if key in self._values:
            self._remove_key(key)
        self._keys.append(key)
        self._values[key] = list(values)

    def _remove_key(self, key: str) -> None:
        self._keys.remove(key)

    def keys(self) -> list[str]:
        """Keys in output order."""
        return list(self._keys)

    def values(self) -> dict[str, list[str]]:
        """Plain multi-map view, usable wherever a dict of lists is expected."""
        return self._values

    def get(self, key: str, default: list[str] | None = None) -> list[str] | None:
        return self._values.get(key, default)

    def encode(self) -> str:
        """
        Render as "key=value&key=value" in recorded key order.

        Returns:
            The escaped query string, without a leading "?"
        """
        if not self._values:
            return ""

        parts = []
        for key in self._keys:
            key_escaped = _escape(key)
            for value in self._values[key]:
                parts.append(f"{key_escaped}={_escape(value)}")
        return "&".join(parts)

    def pairs(self) -> "UrlValuePairs":
        """Flatten into key/value pairs in rendering order."""
        return UrlValuePairs(
            UrlValue(key, value) for key in self._keys for value in self._values[key]
        )

    def __getitem__(self, key: str) -> list[str]:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UrlValues):
            return NotImplemented
        return self._keys == other._keys and self._values == other._values

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self._values[k]!r}" for k in self._keys)
        return f"UrlValues({{{items}}})"

    def __str__(self) -> str:
        return self.encode()


@dataclass(frozen=True)
class UrlValue:
    """A single query key/value pair"""

    key: str
    value: str


class UrlValuePairs(list[UrlValue]):
    """Flat list of key/value pairs rendered exactly in list order"""

    def add(self, key: str, value: str) -> None:
        self.append(UrlValue(key, value))

    def values(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for pair in self:
            grouped.setdefault(pair.key, []).append(pair.value)
        return grouped

    def encode(self) -> str:
        return "&".join(f"{_escape(p.key)}={_escape(p.value)}" for p in self)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "UrlValuePairs":
        return cls(UrlValue(key, value) for key, vals in mapping.items() for value in vals)
