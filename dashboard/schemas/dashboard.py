"""Record shapes returned by the dashboard queries."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict


class Revenue(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: str
    revenue: int


class LatestInvoice(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    amount: str


class InvoicesTableRow(BaseModel):
    """One row of the paginated invoices table; ``amount`` is in cents."""

    id: str
    customer_id: str
    name: str
    email: str
    image_url: str
    date: datetime.date
    amount: int
    status: str


class InvoiceForm(BaseModel):
    """Invoice values for the edit form; ``amount`` is in dollars."""

    id: str
    customer_id: str
    amount: float
    status: str


class CustomerField(BaseModel):
    id: str
    name: str


class CustomersTableRow(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str


class CardData(BaseModel):
    number_of_customers: int
    number_of_invoices: int
    total_paid_invoices: str
    total_pending_invoices: str
