"""
schemakit.io — Encodings, configuration, and schema directory loading.

## Responsibilities
- Render TableSchema values to the canonical TOML document and parse them back.
- Load runtime Settings (env > TOML > defaults).
- Assemble a schema directory into a Catalog with unique table names.

## Public API
- dumps_schema / loads_schema — TOML codec.
- Settings — runtime configuration.
- Catalog — name-keyed schema collection with JSON export.

## Import DAG discipline
- Depends on stdlib, tomli_w, pydantic, and schemakit.core.*.
- MUST NOT import schemakit.cli.
"""

from __future__ import annotations

from .catalog import Catalog
from .config import Settings
from .serde import dumps_schema, loads_schema

__all__ = [
    "Catalog",
    "Settings",
    "dumps_schema",
    "loads_schema",
]
