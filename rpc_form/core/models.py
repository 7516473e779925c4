"""Tagged result models and field-error helpers.

RPC collaborators answer with a tagged union keyed on ``success``:

    {"success": true, "data": {...}}
    {"success": false, "errors": [{"type": "validation_error", "field": "name", "message": "..."}]}

Failure is an expected outcome, so it is modelled as a value rather than an
exception. Collaborators usually hand back decoded JSON, which the parse
helpers turn into the typed models below.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter

# Field path -> ordered, non-empty list of messages
FieldErrors = dict[str, list[str]]

# Key for errors that belong to the whole value rather than a field
ROOT_FIELD = "__root__"

VALIDATION_ERROR = "validation_error"


class RpcError(BaseModel):
    """A single error entry from an RPC failure result.

    Attributes:
        kind: Error kind (wire name ``type``). Only ``validation_error``
            entries are attributable to a field.
        field: Dot-addressed field path, when the server knows it.
        message: Human-readable message.
        errors: Some validation endpoints send a list of messages per
            field instead of a single ``message``.
    """

    kind: str = Field(alias="type")
    field: str | None = None
    message: str | None = None
    errors: list[str] | None = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def is_field_error(self) -> bool:
        """Whether this entry can be attached to a form field."""
        return self.kind == VALIDATION_ERROR and bool(self.field)

    def messages(self) -> list[str]:
        """Return the messages carried by this entry, in server order."""
        if self.errors:
            return list(self.errors)
        if self.message:
            return [self.message]
        return []


class RpcSuccess(BaseModel):
    """Successful RPC result, optionally carrying a payload."""

    success: Literal[True] = True
    data: Any = None

    model_config = ConfigDict(extra="allow")


class RpcFailure(BaseModel):
    """Failed RPC result carrying one or more errors."""

    success: Literal[False] = False
    errors: list[RpcError] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    def summary(self, separator: str = ", ") -> str:
        """Join every message of every error into a single string."""
        return separator.join(msg for error in self.errors for msg in error.messages())


def _result_tag(value: Any) -> str | None:
    if isinstance(value, Mapping):
        success = value.get("success")
    else:
        success = getattr(value, "success", None)
    if success is True:
        return "success"
    if success is False:
        return "failure"
    return None


SubmissionOutcome = Annotated[
    Union[Annotated[RpcSuccess, Tag("success")], Annotated[RpcFailure, Tag("failure")]],
    Discriminator(_result_tag),
]
RemoteValidationResult = SubmissionOutcome

_outcome_adapter: TypeAdapter[SubmissionOutcome] = TypeAdapter(SubmissionOutcome)


def _parse(raw: Any) -> SubmissionOutcome:
    if isinstance(raw, (RpcSuccess, RpcFailure)):
        return raw
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    return _outcome_adapter.validate_python(raw)


def parse_submission_outcome(raw: Any) -> SubmissionOutcome:
    """Parse a submit function's return value into a tagged outcome.

    Args:
        raw: An ``RpcSuccess``/``RpcFailure`` instance, another pydantic
            model, or a plain mapping.

    Returns:
        The typed outcome.

    Raises:
        pydantic.ValidationError: If the value is not a tagged result.
    """
    return _parse(raw)


def parse_validation_result(raw: Any) -> RemoteValidationResult:
    """Parse a remote validation function's return value."""
    return _parse(raw)


def normalize_field_errors(errors: Mapping[str, Iterable[str]]) -> FieldErrors:
    """Copy a field-error mapping, dropping fields with no messages."""
    normalized: FieldErrors = {}
    for field, messages in errors.items():
        message_list = [str(m) for m in messages]
        if message_list:
            normalized[str(field)] = message_list
    return normalized


def field_errors_from_rpc(errors: Iterable[RpcError]) -> FieldErrors:
    """Build field errors from the field-attributable entries of a failure.

    Entries that are not ``validation_error`` or carry no ``field`` are
    skipped. Several entries for the same field accumulate in order.
    """
    delta: FieldErrors = {}
    for error in errors:
        if not error.is_field_error:
            continue
        messages = error.messages()
        if messages:
            delta.setdefault(error.field, []).extend(messages)
    return delta


def merge_field_errors(base: Mapping[str, list[str]], delta: Mapping[str, list[str]]) -> FieldErrors:
    """Merge ``delta`` into ``base`` without clearing other fields.

    Messages already present for a field are not repeated.

    Returns:
        A new mapping; neither argument is modified.
    """
    merged: FieldErrors = {field: list(messages) for field, messages in base.items()}
    for field, messages in delta.items():
        current = merged.setdefault(field, [])
        for message in messages:
            if message not in current:
                current.append(message)
    return normalize_field_errors(merged)


class FormSnapshot(BaseModel):
    """Immutable view of controller state handed to subscribers."""

    value: Any
    field_errors: FieldErrors = Field(default_factory=dict)
    is_submitting: bool = False
    error: str | None = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def has_field_errors(self) -> bool:
        return bool(self.field_errors)
