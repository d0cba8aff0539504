from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv

from schemakit.core.errors import GrammarError, PromptAbortedError, SchemaError
from schemakit.io.catalog import Catalog, load_schema_file
from schemakit.io.config import Settings
from schemakit.io.errors import IoError
from schemakit.io.serde import dumps_schema

from .collector import InitTableRequest, init_table

logger = logging.getLogger("schemakit")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_ABORTED = 130


def _configure_logging(level: str) -> None:
    """Send log records to stderr as ``[LEVEL] name: message``; stdout stays for artifacts."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            stream=sys.stderr,
            format="[%(levelname)s] %(name)s: %(message)s",
        )
    logger.setLevel(level)


def _common_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--config", type=str, default=None, help="Path to a schemakit TOML config.")
    p.add_argument(
        "--no-env",
        action="store_true",
        help="Do not auto-load .env (by default, .env is loaded if present).",
    )
    return p


def _load_settings(args: argparse.Namespace) -> Settings:
    # .env keys never override variables already set in the shell
    if not args.no_env:
        if load_dotenv(Path(".env"), override=False):
            logger.debug("loaded .env from %s", Path(".env").resolve())
    settings = Settings.load(args.config)
    _configure_logging(settings.log_level)
    return settings


def _cmd_init_table(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="schemakit init table",
        description="Create a new table schema and print it as TOML.",
        parents=[_common_parser()],
    )
    p.add_argument(
        "--name",
        type=str,
        default=None,
        help="Table name; prompts interactively when omitted or empty.",
    )
    args = p.parse_args(argv)
    _load_settings(args)

    schema = init_table(InitTableRequest(name=args.name))
    text = dumps_schema(schema)
    sys.stdout.write(text)
    logger.info("initialized table %r (%s)", schema.name, schema.id)
    return EXIT_OK


def _cmd_init(argv: list[str]) -> int:
    usage = "usage: schemakit init table [--name NAME]"
    if not argv:
        print(usage, file=sys.stderr)
        return EXIT_USAGE
    if argv[0] in ("-h", "--help"):
        print(usage)
        return EXIT_OK
    what, rest = argv[0], argv[1:]
    if what == "table":
        return _cmd_init_table(rest)
    print(f"Unknown init target: {what}", file=sys.stderr)
    return EXIT_USAGE


def _cmd_check(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="schemakit check",
        description="Parse and validate table schema files.",
        parents=[_common_parser()],
    )
    p.add_argument("paths", nargs="+", help="Schema TOML files.")
    p.add_argument(
        "--strict",
        action="store_true",
        help="Require ids and system fields to be spelled out (no completion).",
    )
    args = p.parse_args(argv)
    _load_settings(args)

    failures = 0
    for raw in args.paths:
        path = Path(raw)
        try:
            schema = load_schema_file(path, complete=not args.strict)
        except (SchemaError, GrammarError, IoError) as e:
            logger.error("%s: %s", path, e)
            failures += 1
            continue
        print(f"ok {schema.name} ({len(schema.fields)} fields)")
    return EXIT_ERROR if failures else EXIT_OK


def _cmd_catalog(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="schemakit catalog",
        description="Load every schema in the schema directory and print the catalog as JSON.",
        parents=[_common_parser()],
    )
    p.add_argument(
        "--schema-dir",
        type=str,
        default=None,
        help="Directory of *.toml schemas (default from settings).",
    )
    args = p.parse_args(argv)
    settings = _load_settings(args)

    schema_dir = Path(args.schema_dir) if args.schema_dir else settings.schema_path
    catalog = Catalog.from_dir(schema_dir)
    print(catalog.to_json())
    return EXIT_OK


COMMANDS: dict[str, Callable[[list[str]], int]] = {
    "init": _cmd_init,
    "check": _cmd_check,
    "catalog": _cmd_catalog,
}


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="schemakit", description="Table schema authoring utilities.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("init", help="Initialize a new object (currently: table).")
    sub.add_parser("check", help="Validate schema files.")
    sub.add_parser("catalog", help="Print the schema directory as one JSON catalog.")
    return p


def run(argv: list[str]) -> int:
    """Dispatch one command and map operation errors to exit codes; never writes partial output."""
    if not argv:
        build_argparser().print_help()
        return EXIT_USAGE
    cmd, rest = argv[0], argv[1:]
    handler = COMMANDS.get(cmd)
    if handler is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        return EXIT_USAGE
    try:
        return handler(rest)
    except PromptAbortedError as e:
        logger.error("aborted: %s", e)
        return EXIT_ABORTED
    except (SchemaError, GrammarError, IoError) as e:
        logger.error("%s", e)
        return EXIT_ERROR


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
