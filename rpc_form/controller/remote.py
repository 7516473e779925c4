"""Debounced remote validation.

A change that passes local validation schedules a remote check. The check
waits for a quiet period; every new schedule cancels the pending timer, so
a burst of changes collapses into a single call with the last value.

Only the timer is cancellable. Once the quiet period has elapsed the call
runs to completion even if the value changes again. Whether its response is
still applied is controlled by ``discard_stale``: each schedule (and each
``invalidate``) bumps a generation counter, and with ``discard_stale`` set a
response from an older generation is dropped.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from rpc_form.core.models import FieldErrors, field_errors_from_rpc, parse_validation_result

logger = logging.getLogger(__name__)

ValidateFn = Callable[[Any], Any]
ErrorsCallback = Callable[[FieldErrors], None]


class RemoteValidationScheduler:
    """Owns the debounce timer and the remote validation calls it starts."""

    def __init__(
        self,
        validate: ValidateFn,
        on_errors: ErrorsCallback,
        delay: float = 0.3,
        discard_stale: bool = False,
    ) -> None:
        """Initialize the scheduler.

        Args:
            validate: Remote validation function; may be async or return an
                awaitable. Resolves to a tagged validation result.
            on_errors: Receives the field-error delta of a failed result.
            delay: Quiet period in seconds.
            discard_stale: Drop responses superseded by a newer schedule.
        """
        self._validate = validate
        self._on_errors = on_errors
        self.delay = delay
        self.discard_stale = discard_stale

        self._timer: asyncio.Task | None = None
        self._calls: set[asyncio.Task] = set()
        self._generation = 0

    @property
    def pending(self) -> bool:
        """Whether a timer is waiting to fire."""
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> int:
        """Number of remote calls started and not yet resolved."""
        return len(self._calls)

    @property
    def generation(self) -> int:
        return self._generation

    def schedule(self, value: Any) -> None:
        """Replace any pending timer with a new one for ``value``.

        Must be called from a running event loop.
        """
        self.invalidate()
        loop = asyncio.get_running_loop()
        self._timer = loop.create_task(self._fire_after_delay(value, self._generation))
        logger.debug("Remote validation scheduled in %.3fs (generation %d)", self.delay, self._generation)

    def invalidate(self) -> None:
        """Cancel the pending timer and mark in-flight responses as stale."""
        self.cancel()
        self._generation += 1

    def cancel(self) -> None:
        """Cancel the pending timer. In-flight calls are left alone."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def aclose(self) -> None:
        """Cancel the timer and any in-flight calls, and wait for them to settle."""
        self.cancel()
        calls = list(self._calls)
        for task in calls:
            task.cancel()
        if calls:
            await asyncio.gather(*calls, return_exceptions=True)

    async def _fire_after_delay(self, value: Any, generation: int) -> None:
        await asyncio.sleep(self.delay)

        # From here on the call is in flight and no longer owned by the timer
        task = asyncio.current_task()
        if self._timer is task:
            self._timer = None
        self._calls.add(task)
        try:
            await self._run(value, generation)
        finally:
            self._calls.discard(task)

    async def _run(self, value: Any, generation: int) -> None:
        try:
            raw = self._validate(value)
            if inspect.isawaitable(raw):
                raw = await raw
            result = parse_validation_result(raw)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.warning("Remote validation failed; continuing without it", exc_info=True)
            return

        if result.success:
            return

        if self.discard_stale and generation != self._generation:
            logger.debug(
                "Discarding stale remote validation response (generation %d, current %d)",
                generation,
                self._generation,
            )
            return

        delta = field_errors_from_rpc(result.errors)
        if not delta:
            logger.debug("Remote validation failed with no field-attributable errors: %s", result.summary())
            return
        self._on_errors(delta)
