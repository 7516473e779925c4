"""Lookup of the application's form input models by form name."""

from datetime import date
from typing import Any

from pydantic import BaseModel

from rpc_form.forms.company import CompanyInput, CustomerInput
from rpc_form.forms.documents import CreditNoteInput, InvoiceInput

FORM_SCHEMAS: dict[str, type[BaseModel]] = {
    "company": CompanyInput,
    "customer": CustomerInput,
    "invoice": InvoiceInput,
    "credit-note": CreditNoteInput,
}

_PARTY_PREFIXES = ("company", "customer")
_ADDRESS_FIELDS = (
    "Name",
    "AddressLine1",
    "AddressLine2",
    "City",
    "PostalCode",
    "Country",
    "VatNumber",
    "Email",
    "Phone",
)


class FormNotFoundError(LookupError):
    """Raised when no form schema is registered under a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown form: {name} (known forms: {', '.join(sorted(FORM_SCHEMAS))})")


def get_form_schema(name: str) -> type[BaseModel]:
    """Return the input model registered under ``name``.

    Raises:
        FormNotFoundError: If the name is not registered.
    """
    try:
        return FORM_SCHEMAS[name]
    except KeyError:
        raise FormNotFoundError(name) from None


def _blank_parties() -> dict[str, str]:
    return {f"{prefix}{suffix}": "" for prefix in _PARTY_PREFIXES for suffix in _ADDRESS_FIELDS}


def initial_value(name: str, today: date | None = None) -> dict[str, Any]:
    """Blank value a "new" page seeds its controller with.

    Args:
        name: Registered form name.
        today: Issue date for documents; defaults to the current date.
    """
    get_form_schema(name)
    today = today or date.today()

    if name in ("company", "customer"):
        value: dict[str, Any] = {
            "name": "",
            "addressLine1": "",
            "addressLine2": "",
            "city": "",
            "postalCode": "",
            "country": "Norway",
            "vatNumber": "",
            "email": "",
            "phone": "",
        }
        if name == "company":
            value["isDefault"] = False
        return value

    if name == "invoice":
        return {
            "issueDate": today.isoformat(),
            "dueDate": "",
            "currency": "NOK",
            **_blank_parties(),
            "invoiceLines": [],
        }

    return {
        "issueDate": today.isoformat(),
        "creditReason": "",
        "currency": "NOK",
        "originalInvoiceId": None,
        **_blank_parties(),
        "creditNoteLines": [],
    }
