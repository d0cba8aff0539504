"""
Core package aggregator for schemakit contracts (grammar, system fields, schemas, builder).

## Contracts (single source of truth)
- Grammar — DataType enum, lower_snake naming, tag normalization.
- Fields — versioned system field templates injected into every table.
- Schema — frozen pydantic models (TableField, TableSchema) with invariant validators.
- Builder — builds a new TableSchema from a resolved name; completes loaded mappings.
- Errors/Versioning — typed exceptions, template set version metadata.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Naming policy: enum `.value` tags are lower-case; field names are lower_snake.

## Downstream usage
- schemakit.io — renders schemas to canonical TOML/JSON and loads schema directories.
- schemakit.cli — resolves table names interactively and drives the builder.

## Examples
```python
from schemakit.core import build_table_schema, DataType
schema = build_table_schema("users")
schema.fields["id"].data_type is DataType.UUID  # True
schema.fields["created_at"].automatic  # True
```
"""

from __future__ import annotations

from .builder import build_table_schema, complete_table_schema, new_uid
from .errors import EmptyNameError, GrammarError, PromptAbortedError, SchemaError
from .fields import SYSTEM_FIELDS, SystemFieldTemplate
from .grammar import DataType
from .schema import TableField, TableSchema
from .versioning import SYSTEM_FIELDS_V

__all__ = [
    "DataType",
    "TableField",
    "TableSchema",
    "SystemFieldTemplate",
    "SYSTEM_FIELDS",
    "SYSTEM_FIELDS_V",
    "build_table_schema",
    "complete_table_schema",
    "new_uid",
    "SchemaError",
    "GrammarError",
    "EmptyNameError",
    "PromptAbortedError",
]
