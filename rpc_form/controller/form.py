"""Validation-coordinating form controller.

Drives a create/edit form by reconciling three views of its correctness:

1. Local validation runs synchronously on every change and replaces the
   field errors wholesale.
2. Remote validation runs after a quiet period, only for values that pass
   local validation, and merges its field errors into the current ones.
3. Submission re-runs local validation as a hard gate before calling the
   submit function.

All state lives in a FormStore and changes only on the event loop thread.

Example:
    controller = FormController(
        initial_value={"name": "", "email": ""},
        schema=CustomerInput,
        validate_remotely=api.validate_create_customer,
        submit=api.create_customer,
        on_success=lambda data: navigate("/customers"),
    )
    controller.handle_change({**controller.value, "name": "Acme"})
    await controller.handle_submit()
"""

import logging
from collections.abc import Callable
from typing import Any

from rpc_form.controller.config import ControllerConfig
from rpc_form.controller.errors import ControllerClosedError
from rpc_form.controller.remote import RemoteValidationScheduler, ValidateFn
from rpc_form.controller.state import FormStore, Listener
from rpc_form.controller.submission import SubmissionCoordinator, SubmitFn, SuccessCallback
from rpc_form.core.models import FieldErrors, FormSnapshot, merge_field_errors
from rpc_form.validation import LocalValidator, is_within

logger = logging.getLogger(__name__)


def _prevent_default(event: Any) -> None:
    if event is None:
        return
    for name in ("prevent_default", "preventDefault"):
        method = getattr(event, name, None)
        if callable(method):
            method()
            return


class FormController:
    """Holds a form's value and errors and coordinates its validation.

    The value is opaque to the controller and is always replaced whole;
    callers build the next value themselves, typically by copying the
    current one with a changed field.
    """

    def __init__(
        self,
        initial_value: Any,
        schema: Any,
        submit: SubmitFn,
        on_success: SuccessCallback,
        validate_remotely: ValidateFn | None = None,
        config: ControllerConfig | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            initial_value: Starting form value.
            schema: Local validation schema; anything accepted by
                ``rpc_form.validation.as_schema``.
            submit: Submit function resolving to a tagged outcome.
            on_success: Called with the payload of a successful submission.
            validate_remotely: Optional remote validation function. Without
                it no remote validation is ever scheduled.
            config: Controller configuration; defaults apply when omitted.

        Raises:
            TypeError: If the schema cannot be used for validation.
        """
        self.config = config or ControllerConfig()
        self._validator = LocalValidator(schema)
        self._store = FormStore(initial_value)
        self._submission = SubmissionCoordinator(
            self._store,
            submit,
            on_success,
            fallback_error=self.config.fallback_error,
        )
        self._remote: RemoteValidationScheduler | None = None
        if validate_remotely is not None:
            self._remote = RemoteValidationScheduler(
                validate_remotely,
                self._merge_remote_errors,
                delay=self.config.debounce_seconds,
                discard_stale=self.config.discard_stale_remote,
            )
        self._closed = False

    # State

    @property
    def value(self) -> Any:
        return self._store.value

    @property
    def field_errors(self) -> FieldErrors:
        return {field: list(messages) for field, messages in self._store.field_errors.items()}

    @property
    def is_submitting(self) -> bool:
        return self._store.is_submitting

    @property
    def error(self) -> str | None:
        return self._store.error

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def remote(self) -> RemoteValidationScheduler | None:
        """The remote validation scheduler, if remote validation is configured."""
        return self._remote

    def snapshot(self) -> FormSnapshot:
        return self._store.snapshot()

    def errors_for(self, path: str) -> FieldErrors:
        """Field errors for ``path`` and its sub-fields (e.g. one invoice line)."""
        return {
            field: list(messages)
            for field, messages in self._store.field_errors.items()
            if is_within(field, path)
        }

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every state change."""
        return self._store.subscribe(listener)

    # Operations

    def validate(self, value: Any | None = None) -> FieldErrors:
        """Run local validation without touching state."""
        return self._validator(self._store.value if value is None else value)

    def handle_change(self, value: Any) -> FieldErrors:
        """Replace the value, validate it locally and schedule remote validation.

        Remote validation is scheduled only when local validation reports
        no errors; any pending schedule is cancelled either way.

        Returns:
            The local field errors for the new value.
        """
        self._ensure_open("handle_change")
        errors = self._validator(value)
        self._store.update(value=value, field_errors=errors)

        if self._remote is not None:
            if errors:
                self._remote.invalidate()
            else:
                self._remote.schedule(value)
        return {field: list(messages) for field, messages in errors.items()}

    def set_form_data(self, value: Any) -> None:
        """Replace the value without validating it.

        Used to seed the form after a record has been loaded. A remote check
        still waiting on an earlier typed value is dropped.
        """
        if self._remote is not None:
            self._remote.invalidate()
        self._store.update(value=value)

    def set_error(self, message: str | None) -> None:
        self._store.update(error=message)

    async def handle_submit(self, event: Any | None = None) -> bool:
        """Validate and submit the current value.

        Args:
            event: Optional UI event; its default action is prevented.

        Returns:
            True if the submit function reported success, False if the
            submission was blocked, rejected or failed.
        """
        self._ensure_open("handle_submit")
        _prevent_default(event)

        if self.config.reject_concurrent_submit and self._store.is_submitting:
            logger.info("Ignoring submit while a submission is in flight")
            return False

        if self._remote is not None:
            self._remote.cancel()

        value = self._store.value
        errors = self._validator(value)
        if errors:
            self._store.update(field_errors=errors, error=self.config.blocked_message)
            return False

        self._store.update(field_errors=errors, error=None)
        return await self._submission.run(value)

    # Lifecycle

    def close(self) -> None:
        """Tear down: cancel the pending timer and stop publishing state."""
        if self._closed:
            return
        self._closed = True
        if self._remote is not None:
            self._remote.cancel()
        self._store.mute()

    async def aclose(self) -> None:
        """Tear down and wait for in-flight remote validation to settle."""
        self.close()
        if self._remote is not None:
            await self._remote.aclose()

    async def __aenter__(self) -> "FormController":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _merge_remote_errors(self, delta: FieldErrors) -> None:
        if self._closed:
            return
        self._store.update(field_errors=merge_field_errors(self._store.field_errors, delta))

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise ControllerClosedError(operation)
