"""
Custom exceptions for the schemakit.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in schemakit.io.
- Keep schemakit.core as the source of truth for grammar/schema errors (see schemakit.core.errors).

Source of truth and boundaries
- schemakit.core.errors.GrammarError and SchemaError are raised by core validators/models.
- schemakit.io raises Io* errors for configuration, encoding, and catalog concerns:
  - IoConfigError: invalid or unreadable configuration.
  - SerializationError: a schema could not be rendered to text.
  - SchemaDecodeError: schema text is not well-formed UTF-8 TOML.
  - CatalogError: a schema directory cannot be assembled into one catalog.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in schemakit.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from schemakit.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when configuration is invalid or cannot be read.

    Examples:
        - Explicit config path does not exist
        - Config file is not valid TOML
    """


class SerializationError(IoError):
    """
    Raised when the encoder rejects a schema value.

    Notes:
        Should not occur for schemas built from the closed field/type set, but is
        surfaced rather than swallowed; no partial text is returned.
    """


class SchemaDecodeError(IoError):
    """Raised when schema text or file bytes cannot be decoded as UTF-8 TOML."""


class CatalogError(IoError):
    """
    Raised when a schema directory cannot be assembled into a catalog.

    Examples:
        - Two files declare the same table name
        - The schema directory does not exist
    """
