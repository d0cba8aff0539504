from __future__ import annotations

import io
import json
import logging
import tomllib
from pathlib import Path

import pytest

from schemakit.cli import main as cli_main
from schemakit.io.serde import loads_schema


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    # setenv first so values loaded from .env during a test are rolled back too
    for key in ("SCHEMAKIT_SCHEMA_DIR", "SCHEMAKIT_LOG_LEVEL"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_init_table_with_name_prints_toml(capsys) -> None:
    with pytest.raises(SystemExit) as ei:
        cli_main.main(["init", "table", "--name", "users"])
    assert ei.value.code == 0

    out = capsys.readouterr().out
    doc = tomllib.loads(out)
    assert doc["name"] == "users"
    assert doc["fields"]["id"]["type"] == "uuid"
    assert doc["fields"]["id"]["unique"] is True
    assert doc["fields"]["created_at"]["type"] == "timestamp"
    assert "unique" not in doc["fields"]["updated_at"]
    assert loads_schema(out).name == "users"


def test_init_table_prompts_when_name_missing(capsys, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("\nusers\n"))

    code = cli_main.run(["init", "table"])

    assert code == 0
    captured = capsys.readouterr()
    assert 'name = "users"' in captured.out
    assert "Table name" in captured.err
    assert "Table name" not in captured.out


def test_init_table_empty_name_flag_prompts(capsys, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("orders\n"))

    assert cli_main.run(["init", "table", "--name", ""]) == 0
    assert 'name = "orders"' in capsys.readouterr().out


def test_init_table_abort_emits_nothing(capsys, monkeypatch, caplog) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    with caplog.at_level(logging.ERROR, logger="schemakit"):
        code = cli_main.run(["init", "table"])

    assert code == cli_main.EXIT_ABORTED
    assert capsys.readouterr().out == ""
    assert any("aborted" in r.getMessage() for r in caplog.records)


def test_serialization_failure_emits_nothing(capsys, monkeypatch) -> None:
    from schemakit.io.errors import SerializationError

    def fail(_schema):
        raise SerializationError("encoder rejected value")

    monkeypatch.setattr(cli_main, "dumps_schema", fail)

    assert cli_main.run(["init", "table", "--name", "users"]) == cli_main.EXIT_ERROR
    assert capsys.readouterr().out == ""


def test_init_table_undecodable_name_is_error(capsys, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="schemakit"):
        code = cli_main.run(["init", "table", "--no-env", "--name", "caf\udce9"])

    assert code == cli_main.EXIT_ERROR
    assert capsys.readouterr().out == ""
    assert any("not valid UTF-8" in r.getMessage() for r in caplog.records)


def test_check_command(tmp_path: Path, capsys) -> None:
    good = tmp_path / "users.toml"
    good.write_text('name = "users"\n\n[fields.email]\ntype = "string"\n')
    bad = tmp_path / "bad.toml"
    bad.write_text('name = "bad"\n[fields.Email]\ntype = "string"\n')

    assert cli_main.run(["check", str(good)]) == 0
    assert "ok users (4 fields)" in capsys.readouterr().out

    assert cli_main.run(["check", "--strict", str(good)]) == 1
    assert cli_main.run(["check", str(good), str(bad)]) == 1


def test_check_reports_non_utf8_file_and_continues(tmp_path: Path, capsys, caplog) -> None:
    bad = tmp_path / "bad.toml"
    bad.write_bytes(b'name = "\xff"\n')
    good = tmp_path / "users.toml"
    good.write_text('name = "users"\n')

    with caplog.at_level(logging.ERROR, logger="schemakit"):
        code = cli_main.run(["check", "--no-env", str(bad), str(good)])

    assert code == cli_main.EXIT_ERROR
    assert "ok users (3 fields)" in capsys.readouterr().out
    assert any("not valid UTF-8" in r.getMessage() for r in caplog.records)


def test_catalog_non_utf8_file_is_error(tmp_path: Path, capsys) -> None:
    schema_dir = tmp_path / "schemas"
    schema_dir.mkdir()
    (schema_dir / "bad.toml").write_bytes(b'name = "\xff"\n')

    assert cli_main.run(["catalog", "--no-env", "--schema-dir", str(schema_dir)]) == 1
    assert capsys.readouterr().out == ""


def test_catalog_command_uses_settings(tmp_path: Path, capsys, monkeypatch) -> None:
    schema_dir = tmp_path / "schemas"
    schema_dir.mkdir()
    (schema_dir / "users.toml").write_text('name = "users"\n')
    (tmp_path / "schemakit.toml").write_text('schema_dir = "schemas"\n')

    assert cli_main.run(["catalog"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert list(doc["tables"]) == ["users"]


def test_catalog_command_env_from_dotenv(tmp_path: Path, capsys, monkeypatch) -> None:
    schema_dir = tmp_path / "from_env"
    schema_dir.mkdir()
    (schema_dir / "orders.toml").write_text('name = "orders"\n')
    (tmp_path / ".env").write_text("SCHEMAKIT_SCHEMA_DIR=from_env\n")

    assert cli_main.run(["catalog"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert list(doc["tables"]) == ["orders"]


def test_catalog_missing_dir_is_error(tmp_path: Path, capsys) -> None:
    assert cli_main.run(["catalog", "--no-env", "--schema-dir", str(tmp_path / "nope")]) == 1
    assert capsys.readouterr().out == ""


def test_unknown_command_and_init_target(capsys) -> None:
    assert cli_main.run(["frobnicate"]) == cli_main.EXIT_USAGE
    assert cli_main.run(["init", "index"]) == cli_main.EXIT_USAGE
    assert cli_main.run(["init"]) == cli_main.EXIT_USAGE
    err = capsys.readouterr().err
    assert "Unknown command: frobnicate" in err
    assert "Unknown init target: index" in err


def test_no_args_prints_help(capsys) -> None:
    assert cli_main.run([]) == cli_main.EXIT_USAGE
    assert "schemakit" in capsys.readouterr().out
