"""Tests for the local validator and schema adapters."""

from typing import Any

import jsonschema
import pytest
from pydantic import BaseModel, Field, model_validator

from rpc_form.core import ROOT_FIELD
from rpc_form.validation import (
    CallableSchema,
    JsonSchema,
    LocalValidator,
    PydanticSchema,
    as_schema,
    format_path,
    is_within,
)


class Line(BaseModel):
    description: str = Field(min_length=1)
    quantity: int = Field(gt=0)


class Address(BaseModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)


class Order(BaseModel):
    name: str = Field(min_length=1)
    address: Address
    lines: list[Line]

    @model_validator(mode="after")
    def not_empty(self) -> "Order":
        if not self.lines:
            raise ValueError("order has no lines")
        return self


ORDER_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "order",
    "type": "object",
    "required": ["name", "email"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "email": {"type": "string", "format": "email"},
        "lines": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["quantity"],
                "properties": {"quantity": {"type": "integer", "minimum": 1}},
            },
        },
    },
}


class TestPaths:
    """Tests for field path helpers."""

    def test_format_nested_path(self) -> None:
        assert format_path(("invoiceLines", 0, "quantity")) == "invoiceLines.0.quantity"

    def test_format_empty_path_is_root(self) -> None:
        assert format_path(()) == ROOT_FIELD

    def test_is_within(self) -> None:
        assert is_within("lines.0.quantity", "lines.0")
        assert is_within("lines.0", "lines.0")
        assert not is_within("lines.10", "lines.1")


class TestPydanticSchema:
    """Tests for the pydantic adapter."""

    def test_scenario_a_messages(self, contact_schema, invalid_contact) -> None:
        """Test field errors for an empty name and a malformed email."""
        validator = LocalValidator(contact_schema)
        assert validator(invalid_contact) == {
            "name": ["required"],
            "email": ["invalid format"],
        }

    def test_valid_value(self, contact_schema, valid_contact) -> None:
        assert LocalValidator(contact_schema).validate(valid_contact) == {}

    def test_nested_paths(self) -> None:
        """Test that nested and line-item errors get dotted paths."""
        errors = LocalValidator(Order)(
            {
                "name": "x",
                "address": {"street": "", "city": "Oslo"},
                "lines": [{"description": "ok", "quantity": 1}, {"description": "", "quantity": 0}],
            }
        )
        assert set(errors) == {"address.street", "lines.1.description", "lines.1.quantity"}

    def test_model_level_error_goes_to_root(self) -> None:
        errors = LocalValidator(Order)({"name": "x", "address": {"street": "a", "city": "b"}, "lines": []})
        assert errors == {ROOT_FIELD: ["order has no lines"]}

    def test_partial_value_does_not_raise(self) -> None:
        """Test that missing fields are reported, not raised."""
        errors = LocalValidator(Order)({})
        assert set(errors) == {"name", "address", "lines"}

    def test_non_mapping_value_does_not_raise(self) -> None:
        errors = LocalValidator(Order)(None)
        assert list(errors) == [ROOT_FIELD]

    def test_errors_follow_field_order(self) -> None:
        class Strict(BaseModel):
            value: int = Field(gt=0)
            other: int = Field(gt=0)

        errors = LocalValidator(Strict)({"value": 0, "other": "x"})
        assert list(errors) == ["value", "other"]

    def test_rejects_non_model(self) -> None:
        with pytest.raises(TypeError):
            PydanticSchema(dict)


class TestJsonSchema:
    """Tests for the JSON Schema adapter."""

    def test_required_attributed_to_missing_property(self) -> None:
        errors = JsonSchema(ORDER_JSON_SCHEMA).check({"name": "x"})
        assert list(errors) == ["email"]
        assert "required" in errors["email"][0]

    def test_nested_item_path(self) -> None:
        errors = JsonSchema(ORDER_JSON_SCHEMA).check(
            {"name": "x", "email": "a@b.no", "lines": [{"quantity": 1}, {"quantity": 0}]}
        )
        assert list(errors) == ["lines.1.quantity"]

    def test_format_checked(self) -> None:
        errors = JsonSchema(ORDER_JSON_SCHEMA).check({"name": "x", "email": "not-an-email"})
        assert "email" in errors

    def test_several_violations_for_one_field(self) -> None:
        """Test that all violations for a field are kept in schema order."""
        schema = JsonSchema(
            {
                "type": "object",
                "properties": {"code": {"type": "string", "minLength": 5, "pattern": "^[0-9]+$"}},
            }
        )
        errors = schema.check({"code": "ab"})
        assert len(errors["code"]) == 2
        assert "short" in errors["code"][0]

    def test_fields_keep_declared_order(self) -> None:
        schema = JsonSchema(
            {
                "type": "object",
                "properties": {
                    "zipCode": {"type": "string", "minLength": 4},
                    "amount": {"type": "number"},
                },
            }
        )
        errors = schema.check({"amount": "ten", "zipCode": "1"})
        assert list(errors) == ["zipCode", "amount"]

    def test_valid(self) -> None:
        assert JsonSchema(ORDER_JSON_SCHEMA).check({"name": "x", "email": "a@b.no"}) == {}

    def test_malformed_schema_raises(self) -> None:
        """Test that a broken schema is a configuration error."""
        with pytest.raises(jsonschema.SchemaError):
            JsonSchema({"type": "not-a-type"})


class TestCallableSchema:
    """Tests for the callable adapter."""

    def test_drops_empty_fields(self) -> None:
        schema = CallableSchema(lambda v: {"a": [], "b": ["bad"]})
        assert schema.check({}) == {"b": ["bad"]}

    def test_none_result_is_valid(self) -> None:
        assert CallableSchema(lambda v: None).check({}) == {}


class TestAsSchema:
    """Tests for schema resolution."""

    def test_model_class(self, contact_schema) -> None:
        assert isinstance(as_schema(contact_schema), PydanticSchema)

    def test_mapping(self) -> None:
        assert isinstance(as_schema(ORDER_JSON_SCHEMA), JsonSchema)

    def test_existing_schema_passes_through(self) -> None:
        schema = CallableSchema(lambda v: {})
        assert as_schema(schema) is schema

    def test_callable(self) -> None:
        assert isinstance(as_schema(lambda v: {}), CallableSchema)

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="Unsupported schema"):
            as_schema(42)


class TestDeterminism:
    """Local validation yields identical output for identical input."""

    @pytest.mark.parametrize(
        "value",
        [
            {},
            {"name": "", "email": ""},
            {"name": "x", "email": "bad"},
            {"name": "x", "email": "a@b.no"},
        ],
    )
    def test_same_value_same_errors(self, contact_schema, value) -> None:
        validator = LocalValidator(contact_schema)
        assert validator(value) == validator(value)

    def test_results_are_independent_copies(self, contact_schema, invalid_contact) -> None:
        validator = LocalValidator(contact_schema)
        first = validator(invalid_contact)
        first["name"].append("mutated")
        assert validator(invalid_contact)["name"] == ["required"]
