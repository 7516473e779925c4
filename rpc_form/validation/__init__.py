"""Local validation for form values."""

from rpc_form.validation.local import LocalValidator
from rpc_form.validation.paths import format_path, is_within
from rpc_form.validation.schema import (
    CallableSchema,
    FormSchema,
    JsonSchema,
    PydanticSchema,
    as_schema,
    errors_from_pydantic,
)

__all__ = [
    "CallableSchema",
    "FormSchema",
    "JsonSchema",
    "LocalValidator",
    "PydanticSchema",
    "as_schema",
    "errors_from_pydantic",
    "format_path",
    "is_within",
]
