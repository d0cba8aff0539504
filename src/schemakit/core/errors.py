"""
Core exception types raised by grammar validation, schema checks, and name resolution.

Provides typed exceptions for core-domain failures:
- GrammarError for naming/tag normalization violations.
- SchemaError for schema-level constraints (system fields, identifier collisions).
- EmptyNameError when a table name is required but absent or blank.
- PromptAbortedError when the operator cancels interactive input.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Validators in schemakit.core.schema raise:
        - GrammarError for field-name and data-type tag failures.
        - SchemaError for system-field and identifier violations.
    - All of these are terminal for a single operation; the CLI maps them to exit codes.

Examples:
    Catch a blank name before a schema is built.

    >>> from schemakit.core.errors import EmptyNameError, SchemaError
    >>> try:
    ...     raise EmptyNameError("table name must not be empty")
    ... except SchemaError as e:
    ...     msg = str(e)
    >>> "empty" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SchemaError",
    "GrammarError",
    "EmptyNameError",
    "PromptAbortedError",
]


class SchemaError(ValueError):
    """Schema-level validation failure (system fields, identifiers, shape)."""


class GrammarError(ValueError):
    """Naming/tag normalization failure (e.g., field name not lower_snake or unknown type tag)."""


class EmptyNameError(SchemaError):
    """A table name was required but absent or blank."""


class PromptAbortedError(RuntimeError):
    """The operator cancelled interactive input before a value was accepted."""
