"""
Pydantic v2 models for table schemas and their fields.

Responsibilities
- Define the canonical TableField and TableSchema models.
- Normalize data type tags via grammar helpers.
- Enforce the system field invariants (primary key and audit timestamps),
  identifier distinctness, and lower_snake field names.

Style
- Zero-IO (stdlib + pydantic only).
- Models are frozen: a schema is fully populated at construction and never mutated.
- Validators raise GrammarError/SchemaError; pydantic surfaces them wrapped in
  pydantic.ValidationError (itself a ValueError).

References
- grammar: src/schemakit/core/grammar.py (DataType, lower_snake)
- fields: src/schemakit/core/fields.py (system field templates)
- errors: src/schemakit/core/errors.py
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import EmptyNameError, GrammarError, SchemaError
from .fields import get_system_field, is_system_field, list_system_fields
from .grammar import DataType, data_type_from_value, is_lower_snake, is_utf8_text

__all__ = [
    "TableField",
    "TableSchema",
]


class TableField(BaseModel):
    """
    One column of a table.

    Attributes:
        id (UUID): Globally unique identifier, assigned once at creation.
        data_type (DataType): Value kind; serialized under the key ``type``.
        unique (bool): Values must be distinct across rows.
        required (bool): A value must be present (non-null) for every row.
        automatic (bool): Value is system-generated; never user-settable at insertion,
            regardless of ``required``.

    Raises:
        schemakit.core.errors.GrammarError: If the type tag is unknown.

    Examples:
        >>> from uuid import uuid4
        >>> from schemakit.core.schema import TableField
        >>> f = TableField(id=uuid4(), type="timestamp", required=True)
        >>> f.data_type.value, f.unique
        ('timestamp', False)
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    id: UUID
    data_type: DataType = Field(alias="type")
    unique: bool = False
    required: bool = False
    automatic: bool = False

    @field_validator("data_type", mode="before")
    @classmethod
    def _normalize_data_type(cls, v: Any) -> DataType:
        return data_type_from_value(v)

    @property
    def user_settable(self) -> bool:
        """Whether a row-insertion caller may supply a value for this field."""
        return not self.automatic


class TableSchema(BaseModel):
    """
    Structural description of one table.

    Attributes:
        id (UUID): Globally unique table identifier, assigned once at creation.
        name (str): Human-readable, non-blank name. Uniqueness across a catalog is
            enforced by the catalog (see schemakit.io.catalog), not here.
        fields (dict[str, TableField]): Field name -> field. Insertion order is kept
            for readable output; system fields come first when built.

    Raises:
        schemakit.core.errors.EmptyNameError: If ``name`` is blank.
        schemakit.core.errors.SchemaError: If ``name`` is not UTF-8 encodable.
        schemakit.core.errors.GrammarError: If a field name is not lower_snake.
        schemakit.core.errors.SchemaError: If a system field is missing or carries the
            wrong type/flags, if a user field claims to be automatic, or if any two
            identifiers collide.

    Notes:
        - Every schema carries ``id`` (uuid, unique, required, automatic) and
          ``created_at``/``updated_at`` (timestamp, required, automatic).
        - Extra user-declared fields are allowed; only system fields are automatic.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: UUID
    name: str
    fields: dict[str, TableField]

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not v.strip():
            raise EmptyNameError("table name must not be empty")
        if not is_utf8_text(v):
            raise SchemaError(f"table name {v!r} is not valid UTF-8 text")
        return v

    @field_validator("fields")
    @classmethod
    def _check_field_names(cls, v: dict[str, TableField]) -> dict[str, TableField]:
        for name in v:
            if not is_lower_snake(name):
                raise GrammarError(f"field name must be lower_snake, got {name!r}")
        return v

    @model_validator(mode="after")
    def _check_system_fields(self) -> TableSchema:
        """
        Enforce system field presence and constraints, and identifier distinctness.

        Returns:
            TableSchema: The validated instance.

        Raises:
            SchemaError: On any invariant violation.
        """
        for template in list_system_fields():
            if template.name not in self.fields:
                raise SchemaError(f"table {self.name!r} is missing system field {template.name!r}")

        for name, field in self.fields.items():
            if not is_system_field(name):
                if field.automatic:
                    raise SchemaError(
                        f"field {name!r} of table {self.name!r} is automatic but not a system field"
                    )
                continue
            expected = get_system_field(name).constraints()
            actual = {k: getattr(field, k) for k in expected}
            if actual != expected:
                raise SchemaError(
                    f"system field {name!r} of table {self.name!r} must have "
                    f"{_describe(expected)}, got {_describe(actual)}"
                )

        seen: dict[UUID, str] = {self.id: "<table>"}
        for name, field in self.fields.items():
            if field.id in seen:
                raise SchemaError(
                    f"identifier {field.id} of field {name!r} collides with {seen[field.id]!r}"
                )
            seen[field.id] = name
        return self

    def system_fields(self) -> dict[str, TableField]:
        return {name: f for name, f in self.fields.items() if is_system_field(name)}

    def user_fields(self) -> dict[str, TableField]:
        return {name: f for name, f in self.fields.items() if not is_system_field(name)}


def _describe(constraints: dict[str, Any]) -> str:
    parts = []
    for k, v in constraints.items():
        parts.append(f"{k}={v.value if isinstance(v, DataType) else v}")
    return ", ".join(parts)
