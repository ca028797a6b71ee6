"""
Value containers and enums for querystruct.
"""

from .enums import LogLevel, TagOption
from .values import UrlValue, UrlValuePairs, UrlValues

__all__ = [
    "UrlValues",
    "UrlValue",
    "UrlValuePairs",
    "LogLevel",
    "TagOption",
]
