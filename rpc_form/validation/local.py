"""Local (in-process) validation of form values."""

from typing import Any

from rpc_form.core.models import FieldErrors, normalize_field_errors
from rpc_form.validation.schema import FormSchema, as_schema


class LocalValidator:
    """Synchronous schema check run on every change.

    Partially filled values, including the blank initial value of a new
    form, are reported as messages and never raise. Messages for a field
    keep the order the schema reports them in.
    """

    def __init__(self, schema: Any) -> None:
        """Initialize the validator.

        Args:
            schema: Anything accepted by ``as_schema``.
        """
        self.schema: FormSchema = as_schema(schema)

    def validate(self, value: Any) -> FieldErrors:
        """Validate a value and return its field errors (empty if valid)."""
        return normalize_field_errors(self.schema.check(value))

    __call__ = validate

    def is_valid(self, value: Any) -> bool:
        return not self.validate(value)
