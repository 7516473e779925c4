"""Pytest configuration and shared fixtures."""

import re
from collections.abc import Callable, Iterator
from typing import Annotated, Any
from unittest.mock import AsyncMock, Mock

import pytest
from pydantic import AfterValidator, BaseModel
from pydantic_core import PydanticCustomError

from rpc_form.controller import ControllerConfig, FormController

# Short quiet period so timing tests stay fast
FAST_DEBOUNCE_MS = 30


def _required(value: str) -> str:
    if not value:
        raise PydanticCustomError("required", "required")
    return value


def _email(value: str) -> str:
    if not re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", value):
        raise PydanticCustomError("email", "invalid format")
    return value


class ContactInput(BaseModel):
    """Minimal schema: non-empty name and a valid email."""

    name: Annotated[str, AfterValidator(_required)]
    email: Annotated[str, AfterValidator(_email)]
    vatNumber: str = ""


@pytest.fixture
def contact_schema() -> type[BaseModel]:
    return ContactInput


@pytest.fixture
def valid_contact() -> dict[str, Any]:
    return {"name": "Acme AS", "email": "post@acme.no", "vatNumber": ""}


@pytest.fixture
def invalid_contact() -> dict[str, Any]:
    return {"name": "", "email": "not-an-email"}


@pytest.fixture
def fast_config() -> ControllerConfig:
    return ControllerConfig(debounce_ms=FAST_DEBOUNCE_MS)


@pytest.fixture
def submit_ok() -> AsyncMock:
    return AsyncMock(return_value={"success": True, "data": {"id": "abc"}})


@pytest.fixture
def remote_ok() -> AsyncMock:
    return AsyncMock(return_value={"success": True})


@pytest.fixture
def on_success() -> Mock:
    return Mock()


@pytest.fixture
def make_controller(
    contact_schema: type[BaseModel],
    valid_contact: dict[str, Any],
    submit_ok: AsyncMock,
    on_success: Mock,
    fast_config: ControllerConfig,
) -> Iterator[Callable[..., FormController]]:
    """Factory for controllers over the contact schema.

    Keyword arguments override the FormController constructor defaults.
    """
    created: list[FormController] = []

    def factory(**overrides: Any) -> FormController:
        kwargs: dict[str, Any] = {
            "initial_value": dict(valid_contact),
            "schema": contact_schema,
            "submit": submit_ok,
            "on_success": on_success,
            "config": fast_config,
        }
        kwargs.update(overrides)
        controller = FormController(**kwargs)
        created.append(controller)
        return controller

    yield factory

    for controller in created:
        controller.close()
