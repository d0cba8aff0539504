"""
Frozen templates for the system fields injected into every table schema.

Notes:
    - Templates declare name, data type, and the unique/required/automatic flags a
      system field must carry. They do not carry identifiers; each instantiation
      receives a fresh one (see schemakit.core.builder).
    - The template tuple is pinned to SYSTEM_FIELDS_V. New system fields are
      appended (minor bump); existing entries are never edited in place.
    - Core is zero-IO (stdlib only).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .grammar import DataType
from .versioning import SYSTEM_FIELDS_V, SchemaVersion

__all__ = [
    "SystemFieldTemplate",
    "ROW_ID_FIELD",
    "CREATED_AT_FIELD",
    "UPDATED_AT_FIELD",
    "SYSTEM_FIELDS",
    "SYSTEM_FIELD_NAMES",
    "get_system_field",
    "list_system_fields",
    "is_system_field",
]


@dataclass(frozen=True)
class SystemFieldTemplate:
    """
    Frozen descriptor for a field the builder injects into every table.

    Attributes:
        name (str): lower_snake field name (the key under ``fields``).
        data_type (DataType): Value kind of the field.
        unique (bool): Values must be distinct across rows.
        required (bool): A value must be present for every row.
        automatic (bool): Values are system-generated, never supplied at insertion.
        version (SchemaVersion): Template set version this entry belongs to.

    Examples:
        >>> from schemakit.core.fields import get_system_field
        >>> get_system_field("id").constraints()["unique"]
        True
    """

    name: str
    data_type: DataType
    unique: bool
    required: bool
    automatic: bool
    version: SchemaVersion = SYSTEM_FIELDS_V

    def constraints(self) -> dict[str, Any]:
        """Return the field attributes (minus ``id``) a conforming TableField must carry."""
        return {
            "data_type": self.data_type,
            "unique": self.unique,
            "required": self.required,
            "automatic": self.automatic,
        }


# -----------------------------------------------------------------------------
# Templates
# -----------------------------------------------------------------------------

ROW_ID_FIELD = SystemFieldTemplate(
    name="id",
    data_type=DataType.UUID,
    unique=True,
    required=True,
    automatic=True,
)

CREATED_AT_FIELD = SystemFieldTemplate(
    name="created_at",
    data_type=DataType.TIMESTAMP,
    unique=False,
    required=True,
    automatic=True,
)

UPDATED_AT_FIELD = SystemFieldTemplate(
    name="updated_at",
    data_type=DataType.TIMESTAMP,
    unique=False,
    required=True,
    automatic=True,
)

# Order is the order fields appear in serialized schemas.
SYSTEM_FIELDS: tuple[SystemFieldTemplate, ...] = (
    ROW_ID_FIELD,
    CREATED_AT_FIELD,
    UPDATED_AT_FIELD,
)

SYSTEM_FIELD_NAMES: frozenset[str] = frozenset(t.name for t in SYSTEM_FIELDS)

_BY_NAME: dict[str, SystemFieldTemplate] = {t.name: t for t in SYSTEM_FIELDS}


def get_system_field(name: str) -> SystemFieldTemplate:
    """
    Return the template registered under ``name``.

    Raises:
        KeyError: If ``name`` is not a system field.
    """
    try:
        return _BY_NAME[name]
    except KeyError as exc:
        raise KeyError(f"Unknown system field: {name!r}") from exc


def list_system_fields() -> list[SystemFieldTemplate]:
    """Return all system field templates in serialization order."""
    return list(SYSTEM_FIELDS)


def is_system_field(name: str) -> bool:
    return name in SYSTEM_FIELD_NAMES
