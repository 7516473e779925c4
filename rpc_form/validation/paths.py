"""Field path helpers.

Nested values (address blocks, invoice lines) are addressed with dotted
paths so that field errors stay a flat mapping:

    ("invoiceLines", 0, "quantity") -> "invoiceLines.0.quantity"
"""

from collections.abc import Iterable

from rpc_form.core.models import ROOT_FIELD


def format_path(loc: Iterable[str | int]) -> str:
    """Format a location tuple as a dotted field path.

    An empty location refers to the value as a whole and maps to ROOT_FIELD.
    """
    parts = [str(part) for part in loc]
    if not parts:
        return ROOT_FIELD
    return ".".join(parts)


def is_within(path: str, prefix: str) -> bool:
    """Whether ``path`` is ``prefix`` itself or one of its sub-fields."""
    return path == prefix or path.startswith(prefix + ".")
