"""Invoice, invoice builder and the property bag gateway modules extend."""

from paygate.invoice.builder import InvoiceBuilder
from paygate.invoice.invoice import Invoice
from paygate.invoice.properties import PropertyBag, PropertyKey

__all__ = [
    "Invoice",
    "InvoiceBuilder",
    "PropertyBag",
    "PropertyKey",
]
