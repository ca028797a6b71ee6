"""Exception classes with structured context"""

from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Any


class QuerystructError(Exception):
    """Base exception with context and metadata"""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        """
        Initialize exception with context.

        Args:
            message: Technical error message for logs
            details: Additional context (dict for structured logging)
            user_message: User-friendly error message
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.user_message = user_message or message
        self.timestamp = datetime.now()

    def __str__(self) -> str:
        parts = [self.message]

        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({details_str})")

        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "user_message": self.user_message,
            "timestamp": self.timestamp.isoformat(),
        }


class StructuralError(QuerystructError):
    """The value handed to the encoder is not a struct."""

    def __init__(self, value: Any):
        type_name = type(value).__name__
        super().__init__(
            message="querystruct: interface must be a struct",
            details={"type": type_name},
            user_message=f"Cannot encode a value of type '{type_name}'; expected a dataclass or model.",
        )
        self.value = value


class FieldEncodeError(QuerystructError):
    """A single field could not be encoded"""

    def __init__(
        self,
        message: str,
        type_name: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = details or {}
        details["type"] = type_name
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            details=details,
            user_message=f"Field '{field or type_name}' could not be encoded.",
        )
        self.type_name = type_name
        self.field = field


class EncoderNotFoundError(FieldEncodeError):
    """No registered or built-in encoder exists for a field's type"""

    def __init__(self, type_name: str, field: str | None = None, value: Any = None):
        super().__init__(
            message=f"querystruct: encoder not found for {value!r}",
            type_name=type_name,
            field=field,
        )
        self.value = value


class MultiError(QuerystructError, Mapping[str, Exception]):
    """
    Composite of per-field failures collected during one traversal.

    Keys are human-readable type names, values the error raised for that type.
    An empty MultiError is falsy and signals a fully successful encode.
    """

    def __init__(self, errors: Mapping[str, Exception] | None = None):
        self.errors: dict[str, Exception] = dict(errors or {})
        super().__init__(message=self._summary())
        self.partial = None

    def _summary(self) -> str:
        if not self.errors:
            return "(0 errors)"
        first = str(next(iter(self.errors.values())))
        if len(self.errors) == 1:
            return first
        if len(self.errors) == 2:
            return f"{first} (and 1 other error)"
        return f"{first} (and {len(self.errors) - 1} other errors)"

    def add(self, key: str, error: Exception) -> None:
        """Record an error under key, replacing any earlier one."""
        self.errors[key] = error
        self.message = self._summary()
        self.args = (self.message,)

    def __getitem__(self, key: str) -> Exception:
        return self.errors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    # Exceptions compare by identity; keep that instead of Mapping equality.
    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errors"] = {
            key: err.to_dict() if isinstance(err, QuerystructError) else str(err)
            for key, err in self.errors.items()
        }
        return data
