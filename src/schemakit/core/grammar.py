"""
Canonical schemakit grammar and helpers.

Defines the DataType enum and the naming rules shared by schemas, serde, and the CLI.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (TOML/JSON): lower-case tags
   - Field names: lower_snake

2) String-tagged, never ordinal:
   - DataType members serialize as their tag (``"uuid"``, ``"timestamp"``), so new
     variants can be appended without invalidating schema files already written.

Examples
--------
>>> from schemakit.core.grammar import DataType, data_type_from_value, is_lower_snake
>>> data_type_from_value("UUID") is DataType.UUID
True
>>> data_type_from_value("uid") is DataType.UUID
True
>>> DataType.TIMESTAMP.size_in_bytes
8
>>> is_lower_snake("created_at")
True
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

from .errors import GrammarError

__all__ = [
    "DataType",
    "DATA_TYPE_ALIASES",
    "is_lower_snake",
    "is_utf8_text",
    "assert_lower_snake",
    "data_type_from_value",
    "ensure_all_enum_values_lower",
]

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


class DataType(str, Enum):
    """
    Closed set of field value kinds.

    Notes:
        - ``.value`` is the serialized tag; members compare equal to their tag.
        - Width is the fixed storage size of one value; ``None`` marks variable width.
    """

    NIL = "nil"
    UUID = "uuid"
    TIMESTAMP = "timestamp"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    R16 = "r16"
    R32 = "r32"
    R64 = "r64"
    R128 = "r128"
    DECIMAL = "decimal"
    STRING = "string"

    @property
    def size_in_bytes(self) -> int | None:
        return _SIZES[self]


_SIZES: Final[dict[DataType, int | None]] = {
    DataType.NIL: 0,
    DataType.UUID: 16,
    DataType.TIMESTAMP: 8,
    DataType.U8: 1,
    DataType.U16: 2,
    DataType.U32: 4,
    DataType.U64: 8,
    DataType.U128: 16,
    DataType.I8: 1,
    DataType.I16: 2,
    DataType.I32: 4,
    DataType.I64: 8,
    DataType.I128: 16,
    DataType.R16: 2,
    DataType.R32: 4,
    DataType.R64: 8,
    DataType.R128: 16,
    DataType.DECIMAL: 16,
    DataType.STRING: None,
}

# Older schema files spell the identifier type "uid".
DATA_TYPE_ALIASES: Final[dict[str, DataType]] = {
    "uid": DataType.UUID,
}


def is_lower_snake(s: str) -> bool:
    """
    Return True if ``s`` is lower_snake: lower-case alphanumeric runs joined by single underscores.

    Args:
        s (str): Candidate identifier.

    Returns:
        bool: Whether ``s`` is a valid lower_snake token.
    """
    return bool(_LOWER_SNAKE_RE.match(s or ""))


def is_utf8_text(s: str) -> bool:
    """Return True if ``s`` encodes as UTF-8, i.e. carries no lone surrogates."""
    try:
        s.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def assert_lower_snake(s: str, what: str = "value") -> str:
    """
    Return ``s`` unchanged if it is lower_snake, else raise GrammarError.

    Raises:
        GrammarError: If ``s`` is not lower_snake.
    """
    if not isinstance(s, str) or not is_lower_snake(s):
        raise GrammarError(f"{what} must be lower_snake, got {s!r}")
    return s


def data_type_from_value(value: str | DataType) -> DataType:
    """
    Normalize a type tag to a DataType member.

    Args:
        value (str | DataType): Tag such as ``"uuid"``, ``"Timestamp"`` or a member.

    Returns:
        DataType: The matching member.

    Raises:
        GrammarError: If the tag is not a known DataType or alias.
    """
    if isinstance(value, DataType):
        return value
    if not isinstance(value, str):
        raise GrammarError(f"data type tag must be a string, got {value!r}")
    tag = value.strip().lower()
    if tag in DATA_TYPE_ALIASES:
        return DATA_TYPE_ALIASES[tag]
    try:
        return DataType(tag)
    except ValueError as exc:
        raise GrammarError(f"unknown data type {value!r}") from exc


def ensure_all_enum_values_lower() -> None:
    """
    Assert every DataType tag is a lower-case token.

    Raises:
        AssertionError: If any tag contains upper-case or non-token characters.
    """
    for member in DataType:
        if not is_lower_snake(member.value):
            raise AssertionError(f"DataType.{member.name} has non-lower tag: {member.value!r}")
