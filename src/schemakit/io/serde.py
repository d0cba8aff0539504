"""
Canonical text encodings for table schemas.

Provides the TOML document consumed downstream (storage engine, index builder,
query layer) and a canonical JSON policy for catalog exports.

TOML layout
- Top-level ``id`` and ``name``.
- One ``[fields.<name>]`` table per field with ``id``, ``type`` and only the
  flags (``unique``, ``required``, ``automatic``) that are true; absent flags
  decode as false.
- UUIDs are rendered in canonical hyphenated form; data types as their tag.

Notes:
    - Encoding goes through tomli_w; decoding through stdlib tomllib.
    - Decoded identifiers equal the encoded ones; nothing is regenerated unless
      ``complete=True`` is requested for hand-written files missing them.
    - Canonical JSON: sort_keys=True, separators=(",", ":"), ensure_ascii=False.

Examples:
    >>> from schemakit.core import build_table_schema
    >>> from schemakit.io.serde import dumps_schema, loads_schema
    >>> schema = build_table_schema("users")
    >>> loads_schema(dumps_schema(schema)) == schema
    True
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Iterable, Mapping
from typing import Any

import tomli_w
from pydantic import ValidationError

from schemakit.core.builder import complete_table_schema
from schemakit.core.errors import GrammarError, SchemaError
from schemakit.core.schema import TableSchema

from .errors import SchemaDecodeError, SerializationError

__all__ = [
    "FLAG_KEYS",
    "schema_to_mapping",
    "schema_from_mapping",
    "dumps_schema",
    "loads_schema",
    "json_dumps_canonical",
    "dumps_catalog_json",
]

FLAG_KEYS: tuple[str, ...] = ("unique", "required", "automatic")

JsonDict = dict[str, Any]


def schema_to_mapping(schema: TableSchema) -> JsonDict:
    """
    Convert a schema to its plain document shape (strings, bools, nested dicts).

    Args:
        schema (TableSchema): Schema to convert.

    Returns:
        dict[str, Any]: ``{"id", "name", "fields": {name: {"id", "type", flags...}}}``
        where only true flags are present.
    """
    fields: JsonDict = {}
    for name, field in schema.fields.items():
        entry: JsonDict = {"id": str(field.id), "type": field.data_type.value}
        for flag in FLAG_KEYS:
            if getattr(field, flag):
                entry[flag] = True
        fields[name] = entry
    return {"id": str(schema.id), "name": schema.name, "fields": fields}


def schema_from_mapping(data: Mapping[str, Any], *, complete: bool = False) -> TableSchema:
    """
    Validate a decoded document as a TableSchema.

    Args:
        data (Mapping[str, Any]): Decoded document.
        complete (bool): If True, generate missing ids and inject missing system
            fields before validating (see schemakit.core.builder.complete_table_schema).

    Returns:
        TableSchema: Validated schema.

    Raises:
        SchemaError: On shape or invariant violations (EmptyNameError for a blank name).
        GrammarError: On unknown type tags or non lower_snake field names.
    """
    if complete:
        data = complete_table_schema(data)
    try:
        return TableSchema.model_validate(dict(data))
    except ValidationError as exc:
        for err in exc.errors():
            inner = (err.get("ctx") or {}).get("error")
            if isinstance(inner, (SchemaError, GrammarError)):
                raise inner from exc
        raise SchemaError(f"invalid table schema: {exc}") from exc


def dumps_schema(schema: TableSchema) -> str:
    """
    Render a schema as the canonical TOML document.

    Raises:
        SerializationError: If the encoder rejects the document.
    """
    try:
        return tomli_w.dumps(schema_to_mapping(schema))
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"could not encode table {schema.name!r}: {exc}") from exc


def loads_schema(text: str, *, complete: bool = False) -> TableSchema:
    """
    Parse a TOML schema document.

    Args:
        text (str): TOML text.
        complete (bool): Fill missing ids/system fields before validation.

    Returns:
        TableSchema: Decoded schema; identifiers equal the encoded ones.

    Raises:
        SchemaDecodeError: If ``text`` is not valid TOML.
        SchemaError, GrammarError: If the document violates schema rules.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise SchemaDecodeError(f"invalid TOML: {exc}") from exc
    return schema_from_mapping(data, complete=complete)


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Notes:
        Assumes the input is JSON-serializable; no coercion of unsupported types.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def dumps_catalog_json(schemas: Iterable[TableSchema]) -> str:
    """
    Render a set of schemas as one canonical JSON catalog ``{"tables": {name: doc}}``.

    Raises:
        SerializationError: If a schema cannot be encoded.
    """
    tables = {s.name: schema_to_mapping(s) for s in schemas}
    try:
        return json_dumps_canonical({"tables": tables})
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"could not encode catalog: {exc}") from exc
