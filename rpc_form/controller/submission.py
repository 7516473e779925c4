"""Submission of a locally valid form value.

The coordinator owns steps that follow the local validation gate: it
raises the in-progress flag, awaits the submit function, interprets the
tagged outcome and lowers the flag once no submission is running.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from rpc_form.controller.state import FormStore
from rpc_form.core.models import RpcFailure, parse_submission_outcome

logger = logging.getLogger(__name__)

SubmitFn = Callable[[Any], Any]
SuccessCallback = Callable[[Any], None]


class SubmissionCoordinator:
    """Runs a submit function and records its outcome in the store."""

    def __init__(
        self,
        store: FormStore,
        submit: SubmitFn,
        on_success: SuccessCallback,
        fallback_error: str = "An error occurred",
        separator: str = ", ",
    ) -> None:
        """Initialize the coordinator.

        Args:
            store: State store to record the flag and top-level error in.
            submit: Submit function; may be async or return an awaitable.
                Resolves to a tagged submission outcome.
            on_success: Called with the payload of a successful outcome.
            fallback_error: Message used when a failure carries no text.
            separator: Joins the messages of a failed outcome.
        """
        self._store = store
        self._submit = submit
        self._on_success = on_success
        self.fallback_error = fallback_error
        self.separator = separator
        self._running = 0

    @property
    def running(self) -> int:
        """Number of submit calls currently in progress."""
        return self._running

    async def run(self, value: Any) -> bool:
        """Submit ``value``.

        Overlapping runs share the store's flag: it stays raised until the
        last of them has finished.

        Returns:
            True if the submit function reported success, False otherwise.
        """
        self._running += 1
        self._store.update(is_submitting=True)
        try:
            raw = self._submit(value)
            if inspect.isawaitable(raw):
                raw = await raw
        except Exception as e:
            logger.exception("Form submission raised")
            self._finish(error=str(e) or self.fallback_error)
            return False
        except BaseException:
            self._finish()
            raise

        try:
            outcome = parse_submission_outcome(raw)
        except ValidationError as e:
            logger.error("Submit function returned a malformed outcome: %s", e)
            self._finish(error=self.fallback_error)
            return False

        if isinstance(outcome, RpcFailure):
            message = outcome.summary(self.separator) or self.fallback_error
            logger.info("Form submission failed: %s", message)
            self._finish(error=message)
            return False

        self._finish()
        if outcome.data is not None:
            self._on_success(outcome.data)
        return True

    def _finish(self, **changes: Any) -> None:
        self._running -= 1
        self._store.update(is_submitting=self._running > 0, **changes)
