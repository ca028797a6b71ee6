"""Enums for type-safe settings and field options."""

from enum import Enum


class LogLevel(str, Enum):
    """Standard logging levels.

    Attributes:
        DEBUG: Detailed diagnostic information
        INFO: General informational messages
        WARNING: Warning messages for potentially problematic situations
        ERROR: Error messages for serious problems
        CRITICAL: Critical messages for severe errors
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class TagOption(str, Enum):
    """Field tag options understood by the encoder.

    Attributes:
        OMITEMPTY: Skip the field when its value is the zero value of its type
    """
    OMITEMPTY = "omitempty"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


__all__ = [
    "LogLevel",
    "TagOption",
]
