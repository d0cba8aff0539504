"""
Input collection for table initialization.

Resolves the table name either from a preset (scripted use) or from an
interactive prompt that re-asks until the value validates, then hands it to the
schema builder.

Notes:
    - Prompt text and validation messages go to the terminal stream (stderr by
      default) so stdout only ever carries the rendered schema.
    - EOF or Ctrl-C at the prompt raises PromptAbortedError; nothing is defaulted.
    - The prompt's re-ask loop is the only retry; there is no timeout.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from schemakit.core.builder import build_table_schema
from schemakit.core.errors import EmptyNameError, PromptAbortedError
from schemakit.core.grammar import is_utf8_text
from schemakit.core.schema import TableSchema

__all__ = [
    "TextPrompt",
    "TABLE_NAME_PROMPT",
    "InitTableRequest",
    "not_blank",
    "table_name_problem",
    "ask_text",
    "resolve_table_name",
    "init_table",
]

logger = logging.getLogger(__name__)

Validator = Callable[[str], str | None]


def not_blank(value: str) -> str | None:
    """Return an error message for blank input, else None."""
    if not value.strip():
        return "a value is required"
    return None


def table_name_problem(value: str) -> str | None:
    """Reject blank names and names with undecodable bytes."""
    if not is_utf8_text(value):
        return "the name contains bytes that are not valid UTF-8"
    return not_blank(value)


@dataclass(frozen=True)
class TextPrompt:
    """
    A single-line text prompt.

    Attributes:
        title (str): Question shown to the operator.
        placeholder (str): Hint rendered next to the title.
        validate (Callable[[str], str | None] | None): Returns an error message for
            rejected input, None to accept.
    """

    title: str
    placeholder: str = ""
    validate: Validator | None = None

    def render(self) -> str:
        if self.placeholder:
            return f"{self.title} ({self.placeholder}): "
        return f"{self.title}: "

    def check(self, value: str) -> str | None:
        return self.validate(value) if self.validate is not None else None


TABLE_NAME_PROMPT = TextPrompt(
    title="Table name", placeholder="e.g. users", validate=table_name_problem
)


@dataclass(frozen=True)
class InitTableRequest:
    """Immutable parameters of one ``init table`` invocation."""

    name: str | None = None


def ask_text(
    prompt: TextPrompt,
    *,
    read_line: Callable[[], str] = input,
    stream: TextIO | None = None,
) -> str:
    """
    Ask until the operator enters a value the prompt accepts.

    Args:
        prompt (TextPrompt): What to ask and how to validate it.
        read_line (Callable[[], str]): Reads one line without the newline; raises
            EOFError at end of input.
        stream (TextIO | None): Where the prompt is written; defaults to sys.stderr.

    Returns:
        str: The accepted value, unchanged.

    Raises:
        PromptAbortedError: On EOF or keyboard interrupt.
    """
    out = stream if stream is not None else sys.stderr
    while True:
        out.write(prompt.render())
        out.flush()
        try:
            value = read_line()
        except (EOFError, KeyboardInterrupt) as exc:
            out.write("\n")
            raise PromptAbortedError(f"{prompt.title.lower()} input aborted") from exc
        error = prompt.check(value)
        if error is None:
            return value
        out.write(f"  {error}\n")


def resolve_table_name(
    preset: str | None, *, ask: Callable[[TextPrompt], str] = ask_text
) -> str:
    """
    Return the table name from ``preset`` or, if it is absent or blank, from a prompt.

    Args:
        preset (str | None): Name supplied up front (e.g. ``--name``).
        ask (Callable[[TextPrompt], str]): Interactive asker; called only when needed.

    Returns:
        str: Non-blank table name; a usable preset is returned unchanged.

    Raises:
        PromptAbortedError: If the operator aborts the prompt.
        EmptyNameError: If the asker returns a blank value anyway.
    """
    if preset is not None and preset.strip():
        return preset
    logger.debug("no table name preset; prompting")
    value = ask(TABLE_NAME_PROMPT)
    if not value or not value.strip():
        raise EmptyNameError("table name must not be empty")
    return value


def init_table(
    request: InitTableRequest, *, ask: Callable[[TextPrompt], str] = ask_text
) -> TableSchema:
    """Resolve the name for ``request`` and build its schema."""
    name = resolve_table_name(request.name, ask=ask)
    return build_table_schema(name)
