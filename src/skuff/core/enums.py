"""Enumerations used across skuff."""

from enum import Enum


class StreamOrder(str, Enum):
    """How ``ls`` orders streams.  Values match the persisted config."""

    LAST_USED = "LastUsed"
    LEXOGRAPHIC = "Lexographic"
