"""Form controller: state store, remote validation scheduling and submission."""

from rpc_form.controller.config import ControllerConfig
from rpc_form.controller.errors import ControllerClosedError
from rpc_form.controller.form import FormController
from rpc_form.controller.remote import RemoteValidationScheduler
from rpc_form.controller.state import FormStore
from rpc_form.controller.submission import SubmissionCoordinator

__all__ = [
    "ControllerClosedError",
    "ControllerConfig",
    "FormController",
    "FormStore",
    "RemoteValidationScheduler",
    "SubmissionCoordinator",
]
