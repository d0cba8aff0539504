"""
Version tag for the system field template set.

Every SystemFieldTemplate carries SYSTEM_FIELDS_V. Appending a template (e.g., a
soft-delete marker) bumps the minor component; changing an existing template's
constraints bumps the major one.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SchemaVersion:
    """
    Immutable ``major.minor`` version with its ISO release date.

    Raises:
        ValueError: If a component is negative or ``released`` is not YYYY-MM-DD.
    """

    major: int
    minor: int
    released: str

    def __post_init__(self) -> None:
        if min(self.major, self.minor) < 0:
            raise ValueError(f"version components must be non-negative, got {self}")
        # raises ValueError for anything that is not YYYY-MM-DD
        date.fromisoformat(self.released)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


SYSTEM_FIELDS_V = SchemaVersion(1, 0, "2024-05-04")
