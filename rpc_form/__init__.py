"""rpc-form: validation-coordinating form controller for RPC-backed forms."""

__version__ = "0.1.0"

from rpc_form.controller import ControllerConfig, FormController
from rpc_form.core.models import FieldErrors, FormSnapshot, SubmissionOutcome
from rpc_form.validation import LocalValidator, as_schema

__all__ = [
    "__version__",
    "ControllerConfig",
    "FieldErrors",
    "FormController",
    "FormSnapshot",
    "LocalValidator",
    "SubmissionOutcome",
    "as_schema",
]
