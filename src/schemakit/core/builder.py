"""
Schema builder: turns a resolved table name into a fully populated TableSchema.

Notes:
    - Identifiers are random 128-bit UUIDs (uuid4). Generation is treated as
      infallible and is neither retried nor checked for collisions.
    - System fields are instantiated from schemakit.core.fields.list_system_fields(), each
      with its own fresh identifier, in template order.
    - ``complete_table_schema`` is the loader-side counterpart: it fills what a
      hand-written schema mapping leaves out before validation.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any
from uuid import UUID

from .errors import EmptyNameError, SchemaError
from .fields import SystemFieldTemplate, list_system_fields
from .grammar import is_utf8_text
from .schema import TableField, TableSchema

__all__ = [
    "new_uid",
    "instantiate_field",
    "build_table_schema",
    "complete_table_schema",
]

logger = logging.getLogger(__name__)


def new_uid() -> UUID:
    """Return a fresh random 128-bit identifier."""
    return uuid.uuid4()


def instantiate_field(
    template: SystemFieldTemplate, uid_factory: Callable[[], UUID] = new_uid
) -> TableField:
    """
    Create a TableField from a system template with a freshly generated id.

    Args:
        template (SystemFieldTemplate): Template to instantiate.
        uid_factory (Callable[[], UUID]): Identifier source (tests may inject one).

    Returns:
        TableField: Field carrying the template's type and flags.
    """
    return TableField(id=uid_factory(), **template.constraints())


def build_table_schema(name: str, *, uid_factory: Callable[[], UUID] = new_uid) -> TableSchema:
    """
    Build the schema for a new table.

    Args:
        name (str): Non-blank table name, normally resolved by the input collector.
        uid_factory (Callable[[], UUID]): Identifier source; defaults to uuid4.

    Returns:
        TableSchema: Schema with a fresh id, ``name`` unchanged, and exactly the
        system fields (``id``, ``created_at``, ``updated_at``).

    Raises:
        EmptyNameError: If ``name`` is blank.
        SchemaError: If ``name`` cannot be encoded as UTF-8 (e.g. undecodable argv bytes).

    Examples:
        >>> from schemakit.core.builder import build_table_schema
        >>> schema = build_table_schema("users")
        >>> list(schema.fields)
        ['id', 'created_at', 'updated_at']
    """
    if not name or not name.strip():
        raise EmptyNameError("table name must not be empty")
    if not is_utf8_text(name):
        raise SchemaError(f"table name {name!r} is not valid UTF-8 text")

    table_id = uid_factory()
    fields = {t.name: instantiate_field(t, uid_factory) for t in list_system_fields()}
    schema = TableSchema(id=table_id, name=name, fields=fields)
    logger.debug("built schema %s for table %r", schema.id, schema.name)
    return schema


def complete_table_schema(
    data: Mapping[str, Any], *, uid_factory: Callable[[], UUID] = new_uid
) -> dict[str, Any]:
    """
    Fill a loosely authored schema mapping so it can validate as a TableSchema.

    Missing table/field ids are generated and missing system fields are injected
    from their templates. Present values, including system fields declared with
    wrong constraints, are left as-is for validation to report.

    Args:
        data (Mapping[str, Any]): Decoded schema document (``id``, ``name``, ``fields``).
        uid_factory (Callable[[], UUID]): Identifier source.

    Returns:
        dict[str, Any]: New mapping; system fields first, then declared fields in order.
    """
    out = dict(data)
    if not out.get("id"):
        out["id"] = str(uid_factory())

    declared = out.get("fields") or {}
    if not isinstance(declared, Mapping):
        # Leave malformed shapes for model validation to reject.
        return out

    fields: dict[str, Any] = {}
    templates = list_system_fields()
    for template in templates:
        if template.name in declared:
            continue
        logger.debug("injecting system field %r", template.name)
        fields[template.name] = instantiate_field(template, uid_factory).model_dump(
            mode="json", by_alias=True
        )
    for name, entry in declared.items():
        if isinstance(entry, Mapping) and not entry.get("id"):
            entry = {**entry, "id": str(uid_factory())}
        fields[name] = entry

    # Declared system fields keep template order ahead of user fields.
    ordered = {t.name: fields.pop(t.name) for t in templates if t.name in fields}
    ordered.update(fields)
    out["fields"] = ordered
    return out
