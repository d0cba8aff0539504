from __future__ import annotations

import itertools
from uuid import UUID

import pytest

from schemakit.core.builder import build_table_schema, complete_table_schema
from schemakit.core.errors import EmptyNameError, SchemaError
from schemakit.core.grammar import DataType
from schemakit.core.schema import TableSchema

EXPECTED_FLAGS: dict[str, dict[str, object]] = {
    "id": dict(data_type=DataType.UUID, unique=True, required=True, automatic=True),
    "created_at": dict(data_type=DataType.TIMESTAMP, unique=False, required=True, automatic=True),
    "updated_at": dict(data_type=DataType.TIMESTAMP, unique=False, required=True, automatic=True),
}


@pytest.mark.parametrize("name", ["users", "orders", "Audit Log", "x"])
def test_build_table_schema_injects_system_fields(name: str) -> None:
    schema = build_table_schema(name)

    assert schema.name == name
    assert list(schema.fields) == ["id", "created_at", "updated_at"]
    for field_name, flags in EXPECTED_FLAGS.items():
        field = schema.fields[field_name]
        for attr, expected in flags.items():
            assert getattr(field, attr) == expected, f"{field_name}.{attr}"


def test_identifiers_pairwise_distinct() -> None:
    for _ in range(25):
        schema = build_table_schema("users")
        ids = [schema.id] + [f.id for f in schema.fields.values()]
        assert len(set(ids)) == len(ids)
        assert all(isinstance(i, UUID) for i in ids)


def test_each_build_gets_fresh_identifiers() -> None:
    a = build_table_schema("users")
    b = build_table_schema("users")
    assert a.id != b.id
    assert a.fields["id"].id != b.fields["id"].id


def test_uid_factory_is_used_for_table_then_fields() -> None:
    counter = itertools.count(1)

    def fake_uid() -> UUID:
        return UUID(int=next(counter))

    schema = build_table_schema("users", uid_factory=fake_uid)
    assert schema.id == UUID(int=1)
    assert [f.id.int for f in schema.fields.values()] == [2, 3, 4]


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_blank_name_rejected_before_build(name: str) -> None:
    with pytest.raises(EmptyNameError):
        build_table_schema(name)


def test_name_with_undecodable_bytes_rejected() -> None:
    with pytest.raises(SchemaError, match="not valid UTF-8"):
        build_table_schema("caf\udce9")


def test_complete_injects_missing_ids_and_system_fields() -> None:
    data = {
        "name": "accounts",
        "fields": {"email": {"type": "string", "unique": True}},
    }
    completed = complete_table_schema(data)

    assert completed["id"]
    assert list(completed["fields"]) == ["id", "created_at", "updated_at", "email"]
    assert completed["fields"]["email"]["id"]
    schema = TableSchema.model_validate(completed)
    assert schema.fields["email"].unique is True
    assert schema.fields["email"].automatic is False
    # input mapping untouched
    assert "id" not in data


def test_complete_keeps_declared_values() -> None:
    table_id = "00000000-0000-0000-0000-0000000000aa"
    created_id = "00000000-0000-0000-0000-0000000000bb"
    data = {
        "id": table_id,
        "name": "accounts",
        "fields": {
            "created_at": {
                "id": created_id,
                "type": "timestamp",
                "required": True,
                "automatic": True,
            },
        },
    }
    completed = complete_table_schema(data)
    assert completed["id"] == table_id
    assert completed["fields"]["created_at"]["id"] == created_id
    assert list(completed["fields"]) == ["id", "created_at", "updated_at"]
