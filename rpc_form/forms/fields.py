"""Reusable field types for form input models.

Form values arrive as the browser sends them: strings for dates and
numbers, empty strings for untouched optional inputs. These annotated
types validate that shape and report short, user-facing messages.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import AfterValidator, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# camelCase on the wire, snake_case in Python
FORM_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


def _required(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("required", "Required")
    return value


def _email(value: str) -> str:
    if value and not _EMAIL_RE.match(value):
        raise PydanticCustomError("email", "Invalid email address")
    return value


def _iso_date(value: str) -> str:
    _required(value)
    try:
        date.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError("date", "Invalid date, expected YYYY-MM-DD") from None
    return value


def _currency(value: str) -> str:
    if not _CURRENCY_RE.match(value):
        raise PydanticCustomError("currency", "Invalid currency code")
    return value


def parse_decimal(value: str) -> Decimal:
    """Parse a decimal string as typed into a form ("1,5" is accepted)."""
    try:
        number = Decimal(value.strip().replace(",", "."))
    except InvalidOperation:
        raise PydanticCustomError("decimal", "Must be a number") from None
    if not number.is_finite():
        raise PydanticCustomError("decimal", "Must be a number")
    return number


def _decimal(value: str) -> str:
    _required(value)
    parse_decimal(value)
    return value


RequiredText = Annotated[str, AfterValidator(_required)]
OptionalEmail = Annotated[str, AfterValidator(_email)]
IsoDate = Annotated[str, AfterValidator(_iso_date)]
CurrencyCode = Annotated[str, AfterValidator(_currency)]
DecimalText = Annotated[str, AfterValidator(_decimal)]
