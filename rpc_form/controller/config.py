"""Configuration for the form controller."""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

ENV_PREFIX = "RPC_FORM_"


class ControllerConfig(BaseModel):
    """Tunable behaviour of a FormController.

    Attributes:
        debounce_ms: Quiet period after the last change before remote
            validation runs.
        blocked_message: Top-level error shown when submit is blocked by
            local validation.
        fallback_error: Top-level error used when a submit raises without
            a message.
        discard_stale_remote: Drop remote validation responses that arrive
            after a newer value has been entered. Off by default, in which
            case every response is merged when it arrives.
        reject_concurrent_submit: Ignore submit calls while a submission is
            in flight. Off by default; callers are expected to check
            ``is_submitting``.
    """

    debounce_ms: float = Field(default=300, ge=0)
    blocked_message: str = "Please fix the validation errors below"
    fallback_error: str = "An error occurred"
    discard_stale_remote: bool = False
    reject_concurrent_submit: bool = False

    model_config = {"extra": "forbid"}

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = ENV_PREFIX,
        **overrides: Any,
    ) -> "ControllerConfig":
        """Build a config from environment variables.

        Each field is read from ``<prefix><FIELD_NAME>``, e.g.
        ``RPC_FORM_DEBOUNCE_MS=150``. Keyword overrides win over the
        environment.

        Raises:
            pydantic.ValidationError: If a variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            key = f"{prefix}{name.upper()}"
            if key in env:
                values[name] = env[key]
        values.update(overrides)
        return cls.model_validate(values)
