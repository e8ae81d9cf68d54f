"""Pydantic records returned by the dashboard queries."""

from dashboard.schemas.dashboard import (
    CardData,
    CustomerField,
    CustomersTableRow,
    InvoiceForm,
    InvoicesTableRow,
    LatestInvoice,
    Revenue,
)

__all__ = [
    "CardData",
    "CustomerField",
    "CustomersTableRow",
    "InvoiceForm",
    "InvoicesTableRow",
    "LatestInvoice",
    "Revenue",
]
