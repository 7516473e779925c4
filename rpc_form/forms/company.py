"""Company and customer form inputs."""

from pydantic import BaseModel

from rpc_form.forms.fields import FORM_MODEL_CONFIG, OptionalEmail, RequiredText


class CustomerInput(BaseModel):
    """Input of the new/edit customer forms."""

    name: RequiredText
    address_line1: RequiredText
    address_line2: str = ""
    city: RequiredText
    postal_code: RequiredText
    country: RequiredText
    vat_number: str = ""
    email: OptionalEmail = ""
    phone: str = ""

    model_config = FORM_MODEL_CONFIG


class CompanyInput(CustomerInput):
    """Input of the new/edit company forms.

    A company is one of the user's own legal entities; ``is_default``
    marks the one preselected on new invoices.
    """

    is_default: bool = False
