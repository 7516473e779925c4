"""Invoice and credit note form inputs.

Party details (company and customer) are copied onto the document when it
is created, so they are validated as flat ``company*``/``customer*``
fields. Lines are validated as a list; errors for a line are addressed as
``invoiceLines.<index>.<field>``.
"""

from datetime import date

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from rpc_form.forms.fields import (
    FORM_MODEL_CONFIG,
    CurrencyCode,
    DecimalText,
    IsoDate,
    OptionalEmail,
    RequiredText,
    parse_decimal,
)


class DocumentLineInput(BaseModel):
    """One invoice or credit note line."""

    line_number: int = Field(ge=1)
    description: RequiredText
    quantity: DecimalText
    unit_price: DecimalText
    tax_rate: DecimalText

    model_config = FORM_MODEL_CONFIG

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, value: str) -> str:
        if parse_decimal(value) <= 0:
            raise PydanticCustomError("quantity", "Quantity must be greater than zero")
        return value

    @field_validator("unit_price")
    @classmethod
    def price_not_negative(cls, value: str) -> str:
        if parse_decimal(value) < 0:
            raise PydanticCustomError("unit_price", "Unit price cannot be negative")
        return value

    @field_validator("tax_rate")
    @classmethod
    def tax_rate_percentage(cls, value: str) -> str:
        if not 0 <= parse_decimal(value) <= 100:
            raise PydanticCustomError("tax_rate", "Tax rate must be between 0 and 100")
        return value


class PartyFields(BaseModel):
    """Company and customer details copied onto a document."""

    company_name: RequiredText
    company_address_line1: RequiredText
    company_address_line2: str = ""
    company_city: RequiredText
    company_postal_code: RequiredText
    company_country: RequiredText
    company_vat_number: str = ""
    company_email: OptionalEmail = ""
    company_phone: str = ""
    customer_name: RequiredText
    customer_address_line1: RequiredText
    customer_address_line2: str = ""
    customer_city: RequiredText
    customer_postal_code: RequiredText
    customer_country: RequiredText
    customer_vat_number: str = ""
    customer_email: OptionalEmail = ""
    customer_phone: str = ""

    model_config = FORM_MODEL_CONFIG


def _require_lines(lines: list[DocumentLineInput]) -> list[DocumentLineInput]:
    if not lines:
        raise PydanticCustomError("lines", "At least one line is required")
    return lines


class InvoiceInput(PartyFields):
    """Input of the new/edit invoice forms."""

    issue_date: IsoDate
    due_date: IsoDate
    currency: CurrencyCode
    invoice_lines: list[DocumentLineInput]

    @field_validator("due_date")
    @classmethod
    def due_after_issue(cls, value: str, info: ValidationInfo) -> str:
        issue_date = info.data.get("issue_date")
        if issue_date and date.fromisoformat(value) < date.fromisoformat(issue_date):
            raise PydanticCustomError("due_date", "Due date cannot be before the issue date")
        return value

    @field_validator("invoice_lines")
    @classmethod
    def has_lines(cls, value: list[DocumentLineInput]) -> list[DocumentLineInput]:
        return _require_lines(value)


class CreditNoteInput(PartyFields):
    """Input of the new/edit credit note forms."""

    issue_date: IsoDate
    credit_reason: RequiredText
    currency: CurrencyCode
    original_invoice_id: str | None = None
    credit_note_lines: list[DocumentLineInput]

    @field_validator("credit_note_lines")
    @classmethod
    def has_lines(cls, value: list[DocumentLineInput]) -> list[DocumentLineInput]:
        return _require_lines(value)
