"""Read-only dashboard endpoints backed by ``dashboard.database.queries``."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Query, status

from dashboard.core.exceptions import DatabaseError
from dashboard.database import queries
from dashboard.schemas.dashboard import (
    CardData,
    CustomerField,
    CustomersTableRow,
    InvoiceForm,
    InvoicesTableRow,
    LatestInvoice,
    Revenue,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])

T = TypeVar("T")


async def _run(call: Awaitable[T]) -> T:
    try:
        return await call
    except DatabaseError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("/revenue", response_model=list[Revenue])
async def get_revenue() -> list[Revenue]:
    return await _run(queries.fetch_revenue())


@router.get("/cards", response_model=CardData)
async def get_card_data() -> CardData:
    return await _run(queries.fetch_card_data())


@router.get("/invoices/latest", response_model=list[LatestInvoice])
async def get_latest_invoices() -> list[LatestInvoice]:
    return await _run(queries.fetch_latest_invoices())


@router.get("/invoices/pages")
async def get_invoice_pages(query: str = Query(default="", max_length=200)) -> dict:
    total_pages = await _run(queries.fetch_invoices_pages(query))
    return {"query": query, "total_pages": total_pages}


@router.get("/invoices", response_model=list[InvoicesTableRow])
async def get_invoices(
    query: str = Query(default="", max_length=200),
    page: int = Query(default=1, ge=1),
) -> list[InvoicesTableRow]:
    return await _run(queries.fetch_filtered_invoices(query, page))


@router.get("/invoices/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(invoice_id: str) -> InvoiceForm:
    invoice = await _run(queries.fetch_invoice_by_id(invoice_id))
    if invoice is None:
        logger.info("invoice.not_found", extra={"event": "invoice.not_found", "invoice_id": invoice_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found.")
    return invoice


@router.get("/customers", response_model=list[CustomerField])
async def get_customers() -> list[CustomerField]:
    return await _run(queries.fetch_customers())


@router.get("/customers/table", response_model=list[CustomersTableRow])
async def get_customers_table(query: str = Query(default="", max_length=200)) -> list[CustomersTableRow]:
    return await _run(queries.fetch_filtered_customers(query))
