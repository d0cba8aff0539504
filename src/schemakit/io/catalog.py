"""
Schema catalog: every table schema found in one schema directory.

Responsibilities
- Load ``*.toml`` files from a directory (sorted by file name) and complete them
  (missing ids and system fields are filled in, see schemakit.core.builder).
- Enforce catalog-level table name uniqueness.
- Export the catalog as canonical JSON.

Notes
- Loading never writes back to the schema files; completion happens in memory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from schemakit.core.schema import TableSchema

from .errors import CatalogError, SchemaDecodeError
from .serde import dumps_catalog_json, loads_schema

__all__ = [
    "Catalog",
    "load_schema_file",
]

logger = logging.getLogger(__name__)


def load_schema_file(path: Path, *, complete: bool = True) -> TableSchema:
    """
    Read and decode one schema file.

    Raises:
        CatalogError: If the file cannot be read.
        SchemaDecodeError: If the file is not UTF-8 encoded TOML.
        SchemaError, GrammarError: If its content is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"cannot read schema file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaDecodeError(f"schema file {path} is not valid UTF-8: {exc}") from exc
    return loads_schema(text, complete=complete)


@dataclass
class Catalog:
    """
    Name-keyed collection of table schemas.

    Attributes:
        tables (dict[str, TableSchema]): Table name -> schema, in load order.
        sources (dict[str, Path]): Table name -> file it was loaded from (if any).

    Examples:
        >>> from schemakit.core import build_table_schema
        >>> from schemakit.io.catalog import Catalog
        >>> cat = Catalog()
        >>> cat.add(build_table_schema("users"))
        >>> "users" in cat
        True
    """

    tables: dict[str, TableSchema] = field(default_factory=dict)
    sources: dict[str, Path] = field(default_factory=dict)

    def add(self, schema: TableSchema, source: Path | None = None) -> None:
        """
        Register a schema.

        Raises:
            CatalogError: If a table with the same name is already registered.
        """
        if schema.name in self.tables:
            where = self.sources.get(schema.name)
            raise CatalogError(
                f"duplicate table name {schema.name!r}"
                + (f" (already loaded from {where})" if where else "")
            )
        self.tables[schema.name] = schema
        if source is not None:
            self.sources[schema.name] = source

    def get(self, name: str) -> TableSchema:
        try:
            return self.tables[name]
        except KeyError as exc:
            raise CatalogError(f"unknown table {name!r}") from exc

    def __contains__(self, name: object) -> bool:
        return name in self.tables

    def __iter__(self) -> Iterator[TableSchema]:
        return iter(self.tables.values())

    def __len__(self) -> int:
        return len(self.tables)

    def to_json(self) -> str:
        return dumps_catalog_json(self.tables.values())

    @classmethod
    def from_dir(cls, schema_dir: str | Path) -> Catalog:
        """
        Load every ``*.toml`` schema in ``schema_dir``.

        Raises:
            CatalogError: If the directory is missing, a file is unreadable, or two
                files declare the same table name.
            SchemaDecodeError, SchemaError, GrammarError: If a file is invalid.
        """
        root = Path(schema_dir)
        if not root.is_dir():
            raise CatalogError(f"schema directory not found: {root}")

        catalog = cls()
        for path in sorted(root.glob("*.toml")):
            schema = load_schema_file(path)
            catalog.add(schema, source=path)
            logger.debug("loaded table %r from %s", schema.name, path)
        logger.info("loaded %d table(s) from %s", len(catalog), root)
        return catalog
