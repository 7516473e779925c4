"""State store for a form controller.

Holds the current value, field errors, submission flag and top-level
error. Every update is applied wholesale and then published to
subscribers as a FormSnapshot.
"""

import logging
from collections.abc import Callable
from typing import Any

from rpc_form.core.models import FieldErrors, FormSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[FormSnapshot], None]

_FIELDS = ("value", "field_errors", "is_submitting", "error")


class FormStore:
    """Single owner of a controller's mutable state."""

    def __init__(self, value: Any) -> None:
        self.value: Any = value
        self.field_errors: FieldErrors = {}
        self.is_submitting: bool = False
        self.error: str | None = None
        self._listeners: list[Listener] = []
        self._muted = False

    def update(self, **changes: Any) -> None:
        """Apply changes to one or more state fields and notify once.

        Raises:
            AttributeError: If a change names an unknown field.
        """
        for name in changes:
            if name not in _FIELDS:
                raise AttributeError(f"Unknown form state field: {name}")
        for name, new in changes.items():
            setattr(self, name, new)
        self._notify()

    def snapshot(self) -> FormSnapshot:
        return FormSnapshot(
            value=self.value,
            field_errors={field: list(messages) for field, messages in self.field_errors.items()},
            is_submitting=self.is_submitting,
            error=self.error,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def mute(self) -> None:
        """Stop notifying listeners (the owning view is gone)."""
        self._muted = True
        self._listeners.clear()

    def _notify(self) -> None:
        if self._muted or not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Form state listener %r failed", listener)
