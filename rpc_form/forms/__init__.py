"""Input models for the invoicing application's forms."""

from rpc_form.forms.company import CompanyInput, CustomerInput
from rpc_form.forms.documents import CreditNoteInput, DocumentLineInput, InvoiceInput
from rpc_form.forms.registry import (
    FORM_SCHEMAS,
    FormNotFoundError,
    get_form_schema,
    initial_value,
)

__all__ = [
    "FORM_SCHEMAS",
    "CompanyInput",
    "CreditNoteInput",
    "CustomerInput",
    "DocumentLineInput",
    "FormNotFoundError",
    "InvoiceInput",
    "get_form_schema",
    "initial_value",
]
