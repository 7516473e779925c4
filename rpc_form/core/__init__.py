"""Core shared models for rpc-form.

Contains the tagged result types exchanged with RPC collaborators and
the field-error helpers used by both the local and remote validators.
"""

from rpc_form.core.models import (
    ROOT_FIELD,
    FieldErrors,
    FormSnapshot,
    RemoteValidationResult,
    RpcError,
    RpcFailure,
    RpcSuccess,
    SubmissionOutcome,
    field_errors_from_rpc,
    merge_field_errors,
    normalize_field_errors,
    parse_submission_outcome,
    parse_validation_result,
)

__all__ = [
    "ROOT_FIELD",
    "FieldErrors",
    "FormSnapshot",
    "RemoteValidationResult",
    "RpcError",
    "RpcFailure",
    "RpcSuccess",
    "SubmissionOutcome",
    "field_errors_from_rpc",
    "merge_field_errors",
    "normalize_field_errors",
    "parse_submission_outcome",
    "parse_validation_result",
]
