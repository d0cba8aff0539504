"""
schemakit.cli — Command-line surface and interactive input collection.

## Commands
- ``schemakit init table [--name NAME]`` — build a new table schema and print it as TOML.
- ``schemakit check PATH...`` — validate schema files.
- ``schemakit catalog [--schema-dir DIR]`` — print all schemas in a directory as JSON.

## Notes
- stdout carries only the rendered artifact; prompts and logs go to stderr.
"""

from __future__ import annotations

from .collector import InitTableRequest, TextPrompt, ask_text, init_table, resolve_table_name

__all__ = [
    "InitTableRequest",
    "TextPrompt",
    "ask_text",
    "init_table",
    "resolve_table_name",
]
