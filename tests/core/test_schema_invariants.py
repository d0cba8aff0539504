from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest
from pydantic import ValidationError

from schemakit.core.builder import build_table_schema
from schemakit.core.errors import SchemaError
from schemakit.core.grammar import DataType
from schemakit.core.schema import TableField, TableSchema


def make_payload(**overrides: Any) -> dict[str, Any]:
    schema = build_table_schema("users")
    payload = schema.model_dump(by_alias=True)
    payload.update(overrides)
    return payload


def _has_schema_error(ei: pytest.ExceptionInfo[ValidationError]) -> bool:
    return any(
        isinstance((err.get("ctx") or {}).get("error"), SchemaError) for err in ei.value.errors()
    )


def test_built_schema_revalidates() -> None:
    schema = TableSchema.model_validate(make_payload())
    assert schema.name == "users"


@pytest.mark.parametrize("missing", ["id", "created_at", "updated_at"])
def test_missing_system_field_rejected(missing: str) -> None:
    payload = make_payload()
    payload["fields"].pop(missing)
    with pytest.raises(ValidationError) as ei:
        TableSchema.model_validate(payload)
    assert _has_schema_error(ei)


@pytest.mark.parametrize(
    "field_name,attr,value",
    [
        ("id", "unique", False),
        ("id", "type", "timestamp"),
        ("created_at", "unique", True),
        ("updated_at", "automatic", False),
        ("updated_at", "required", False),
    ],
)
def test_wrong_system_field_constraints_rejected(field_name: str, attr: str, value: Any) -> None:
    payload = make_payload()
    payload["fields"][field_name][attr] = value
    with pytest.raises(ValidationError) as ei:
        TableSchema.model_validate(payload)
    assert _has_schema_error(ei)


def test_user_field_cannot_be_automatic() -> None:
    payload = make_payload()
    payload["fields"]["score"] = {"id": uuid4(), "type": "i64", "automatic": True}
    with pytest.raises(ValidationError) as ei:
        TableSchema.model_validate(payload)
    assert "not a system field" in str(ei.value)


def test_user_field_allowed() -> None:
    payload = make_payload()
    payload["fields"]["score"] = {"id": uuid4(), "type": "i64", "required": True}
    schema = TableSchema.model_validate(payload)
    assert list(schema.user_fields()) == ["score"]
    assert list(schema.system_fields()) == ["id", "created_at", "updated_at"]
    assert schema.fields["score"].user_settable
    assert not schema.fields["id"].user_settable


def test_colliding_identifiers_rejected() -> None:
    payload = make_payload()
    payload["fields"]["updated_at"]["id"] = payload["fields"]["created_at"]["id"]
    with pytest.raises(ValidationError) as ei:
        TableSchema.model_validate(payload)
    assert "collides" in str(ei.value)


def test_field_id_colliding_with_table_id_rejected() -> None:
    payload = make_payload()
    payload["fields"]["id"]["id"] = payload["id"]
    with pytest.raises(ValidationError):
        TableSchema.model_validate(payload)


def test_non_lower_snake_field_name_rejected() -> None:
    payload = make_payload()
    payload["fields"]["Score"] = {"id": uuid4(), "type": "i64"}
    with pytest.raises(ValidationError) as ei:
        TableSchema.model_validate(payload)
    assert "lower_snake" in str(ei.value)


@pytest.mark.parametrize("name", ["", "  "])
def test_blank_name_rejected(name: str) -> None:
    with pytest.raises(ValidationError) as ei:
        TableSchema.model_validate(make_payload(name=name))
    assert "must not be empty" in str(ei.value)


def test_extra_keys_forbidden() -> None:
    with pytest.raises(ValidationError):
        TableSchema.model_validate(make_payload(comment="nope"))


def test_field_defaults_and_alias() -> None:
    f = TableField(id=uuid4(), type="Timestamp")
    assert f.data_type is DataType.TIMESTAMP
    assert (f.unique, f.required, f.automatic) == (False, False, False)
    g = TableField(id=uuid4(), data_type=DataType.UUID)
    assert g.data_type is DataType.UUID


def test_schema_is_frozen() -> None:
    schema = build_table_schema("users")
    with pytest.raises(ValidationError):
        schema.name = "other"  # type: ignore[misc]
