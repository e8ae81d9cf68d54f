"""Enums for the dashboard data layer."""

from enum import Enum


class InvoiceStatus(Enum):
    """Status of invoices. Stored lowercase, matching the dashboard filters."""

    PENDING = "pending"
    PAID = "paid"

