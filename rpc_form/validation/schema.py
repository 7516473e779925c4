"""Schema adapters for the local validator.

The controller is schema-agnostic: anything that can check a value and
report per-field messages can back a form. Three adapters are provided:

- PydanticSchema: a pydantic model class
- JsonSchema: a JSON Schema document, checked with ``jsonschema``
- CallableSchema: a plain ``value -> {field: [messages]}`` function

Use ``as_schema`` to pick the adapter for an object.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

import jsonschema
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError
from pydantic import BaseModel, ValidationError

from rpc_form.core.models import FieldErrors, normalize_field_errors
from rpc_form.validation.paths import format_path


@runtime_checkable
class FormSchema(Protocol):
    """Protocol for objects that validate a form value.

    Implementations must report every violation as a message rather than
    raising for bad user data.
    """

    def check(self, value: Any) -> FieldErrors:
        """Check a value and return field path -> messages (empty if valid)."""
        ...


class PydanticSchema:
    """Validates values against a pydantic model class."""

    def __init__(self, model: type[BaseModel]) -> None:
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError(f"Expected a pydantic model class, got {model!r}")
        self.model = model

    def check(self, value: Any) -> FieldErrors:
        try:
            self.model.model_validate(value)
        except ValidationError as e:
            return errors_from_pydantic(e)
        return {}

    def __repr__(self) -> str:
        return f"PydanticSchema({self.model.__name__})"


def _pydantic_message(error: Mapping[str, Any]) -> str:
    # "Value error, <msg>" -> "<msg>" for ValueErrors raised in validators
    if error.get("type") == "value_error":
        ctx = error.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])
    return str(error["msg"])


def errors_from_pydantic(exc: ValidationError) -> FieldErrors:
    """Convert a pydantic ValidationError into field errors.

    Messages keep pydantic's reported order within each field.
    """
    errors: FieldErrors = {}
    for error in exc.errors():
        path = format_path(error["loc"])
        errors.setdefault(path, []).append(_pydantic_message(error))
    return errors


class JsonSchema:
    """Validates values against a JSON Schema document.

    The schema itself is checked at construction time; a malformed schema
    raises ``jsonschema.SchemaError``.
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        validator_cls: type | None = None,
    ) -> None:
        if validator_cls is None:
            validator_cls = jsonschema.validators.validator_for(
                schema, default=jsonschema.Draft202012Validator
            )
        validator_cls.check_schema(schema)
        self.schema = schema
        self._validator = validator_cls(schema, format_checker=jsonschema.FormatChecker())

    def check(self, value: Any) -> FieldErrors:
        errors: FieldErrors = {}
        for error in self._validator.iter_errors(value):
            path = format_path(_error_location(error))
            errors.setdefault(path, []).append(error.message)
        return errors

    def __repr__(self) -> str:
        title = self.schema.get("title", "untitled")
        return f"JsonSchema({title!r})"


def _error_location(error: JsonSchemaValidationError) -> list[str | int]:
    """Location of a jsonschema error, attributing ``required`` to the missing key."""
    loc = list(error.absolute_path)
    if error.validator == "required" and isinstance(error.instance, Mapping):
        for name in error.validator_value:
            if name not in error.instance and error.message.startswith(f"{name!r} "):
                loc.append(name)
                break
    return loc


class CallableSchema:
    """Wraps a plain function returning a field -> messages mapping."""

    def __init__(self, func: Callable[[Any], Mapping[str, Any]]) -> None:
        self.func = func

    def check(self, value: Any) -> FieldErrors:
        return normalize_field_errors(self.func(value) or {})

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", type(self.func).__name__)
        return f"CallableSchema({name})"


def as_schema(schema: Any) -> FormSchema:
    """Resolve a schema-like object to a FormSchema.

    Args:
        schema: A pydantic model class, a JSON Schema mapping, an object
            with a ``check(value)`` method, or a callable.

    Returns:
        A FormSchema implementation.

    Raises:
        TypeError: If the object cannot be used as a schema.
    """
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return PydanticSchema(schema)
    if isinstance(schema, Mapping):
        return JsonSchema(schema)
    if isinstance(schema, FormSchema):
        return schema
    if callable(schema):
        return CallableSchema(schema)
    raise TypeError(f"Unsupported schema type: {type(schema).__name__}")
