"""
schemakit — Table schema definition model.

Builds table schemas with injected system fields (primary key and audit
timestamps), collects table names interactively with validation, and renders
schemas to the canonical TOML document consumed by storage, index, and query
layers.

Subpackages
- schemakit.core — grammar, system field templates, schema models, builder (zero-IO).
- schemakit.io — TOML/JSON codecs, settings, schema directory catalog.
- schemakit.cli — input collector and command-line entry point.
"""

__version__ = "0.1.0"
