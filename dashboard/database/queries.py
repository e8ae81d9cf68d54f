"""Read-only dashboard queries over invoices, customers and revenue.

Every function issues parameterised statements on its own session and
returns pydantic records. Database failures are logged and replaced with a
``DatabaseError`` carrying a generic, per-operation message.
"""

from __future__ import annotations

import asyncio
import logging
import math

from sqlalchemy import String, case, cast, func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from dashboard.core.config import get_config
from dashboard.core.enums import InvoiceStatus
from dashboard.core.exceptions import DatabaseError
from dashboard.database.db import get_db_session
from dashboard.database.models import Customer, Invoice, Revenue
from dashboard.schemas.dashboard import (
    CardData,
    CustomerField,
    CustomersTableRow,
    InvoiceForm,
    InvoicesTableRow,
    LatestInvoice,
)
from dashboard.schemas.dashboard import Revenue as RevenueRecord
from dashboard.utils.formatting import format_currency, to_major_units

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5

# Driver and pool failures surface as SQLAlchemyError; socket-level failures
# while connecting can escape as OSError.
_DB_ERRORS = (SQLAlchemyError, OSError)


def _like(query: str | None) -> str:
    return f"%{query or ''}%"


def _sum_by_status(status: InvoiceStatus):
    return func.coalesce(func.sum(case((Invoice.status == status.value, Invoice.amount), else_=0)), 0)


def _invoice_search(query: str | None):
    like = _like(query)
    return or_(
        Customer.name.ilike(like),
        Customer.email.ilike(like),
        cast(Invoice.amount, String).ilike(like),
        cast(Invoice.date, String).ilike(like),
        Invoice.status.ilike(like),
    )


def _customer_search(query: str | None):
    like = _like(query)
    return or_(Customer.name.ilike(like), Customer.email.ilike(like))


# ==============================================================================
# OVERVIEW PAGE
# ==============================================================================


async def fetch_revenue() -> list[RevenueRecord]:
    config = get_config()
    try:
        if not config.is_production and config.REVENUE_FETCH_DELAY_SECONDS > 0:
            logger.info("Fetching revenue data...", extra={"event": "db.fetch_revenue.delay"})
            await asyncio.sleep(config.REVENUE_FETCH_DELAY_SECONDS)

        async with get_db_session() as session:
            result = await session.execute(select(Revenue))
            return [RevenueRecord.model_validate(row) for row in result.scalars().all()]
    except _DB_ERRORS as exc:
        logger.exception("db.fetch_revenue.failed", extra={"event": "db.fetch_revenue.failed"})
        raise DatabaseError("Failed to fetch revenue data.") from exc


async def fetch_latest_invoices() -> list[LatestInvoice]:
    stmt = (
        select(
            Invoice.amount,
            Customer.name,
            Customer.image_url,
            Customer.email,
            Invoice.id,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc())
        .limit(LATEST_INVOICES_LIMIT)
    )
    try:
        async with get_db_session() as session:
            rows = (await session.execute(stmt)).all()
    except _DB_ERRORS as exc:
        logger.exception("db.fetch_latest_invoices.failed", extra={"event": "db.fetch_latest_invoices.failed"})
        raise DatabaseError("Failed to fetch the latest invoices.") from exc

    return [
        LatestInvoice(
            id=row.id,
            name=row.name,
            email=row.email,
            image_url=row.image_url,
            amount=format_currency(row.amount),
        )
        for row in rows
    ]


async def _fetch_one(stmt):
    async with get_db_session() as session:
        return (await session.execute(stmt)).first()


async def fetch_card_data() -> CardData:
    invoice_count = select(func.count(Invoice.id).label("total"))
    customer_count = select(func.count(Customer.id).label("total"))
    invoice_status = select(
        _sum_by_status(InvoiceStatus.PAID).label("paid"),
        _sum_by_status(InvoiceStatus.PENDING).label("pending"),
    )
    try:
        invoice_row, customer_row, status_row = await asyncio.gather(
            _fetch_one(invoice_count),
            _fetch_one(customer_count),
            _fetch_one(invoice_status),
        )
    except _DB_ERRORS as exc:
        logger.exception("db.fetch_card_data.failed", extra={"event": "db.fetch_card_data.failed"})
        raise DatabaseError("Failed to fetch card data.") from exc

    return CardData(
        number_of_invoices=int(invoice_row.total if invoice_row else 0),
        number_of_customers=int(customer_row.total if customer_row else 0),
        total_paid_invoices=format_currency(status_row.paid if status_row else 0),
        total_pending_invoices=format_currency(status_row.pending if status_row else 0),
    )


# ==============================================================================
# INVOICES PAGE
# ==============================================================================


async def fetch_filtered_invoices(query: str | None, current_page: int) -> list[InvoicesTableRow]:
    current_page = max(int(current_page), 1)
    offset = (current_page - 1) * ITEMS_PER_PAGE

    stmt = (
        select(
            Invoice.id,
            Invoice.customer_id,
            Invoice.amount,
            Invoice.date,
            Invoice.status,
            Customer.name,
            Customer.email,
            Customer.image_url,
        )
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(_invoice_search(query))
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
    )
    try:
        async with get_db_session() as session:
            rows = (await session.execute(stmt)).all()
    except _DB_ERRORS as exc:
        logger.exception(
            "db.fetch_filtered_invoices.failed",
            extra={"event": "db.fetch_filtered_invoices.failed", "page": current_page},
        )
        raise DatabaseError("Failed to fetch invoices.") from exc

    return [InvoicesTableRow.model_validate(dict(row._mapping)) for row in rows]


async def fetch_invoices_pages(query: str | None) -> int:
    stmt = (
        select(func.count(Invoice.id))
        .select_from(Invoice)
        .join(Customer, Invoice.customer_id == Customer.id)
        .where(_invoice_search(query))
    )
    try:
        async with get_db_session() as session:
            count = (await session.execute(stmt)).scalar_one_or_none()
    except _DB_ERRORS as exc:
        logger.exception("db.fetch_invoices_pages.failed", extra={"event": "db.fetch_invoices_pages.failed"})
        raise DatabaseError("Failed to fetch total number of invoices.") from exc

    return math.ceil(int(count or 0) / ITEMS_PER_PAGE)


async def fetch_invoice_by_id(invoice_id: str) -> InvoiceForm | None:
    """Return the invoice shaped for the edit form, or ``None`` if it does not exist."""
    stmt = (
        select(Invoice.id, Invoice.customer_id, Invoice.amount, Invoice.status)
        .where(Invoice.id == invoice_id)
        .limit(1)
    )
    try:
        async with get_db_session() as session:
            row = (await session.execute(stmt)).first()
    except _DB_ERRORS as exc:
        logger.exception(
            "db.fetch_invoice_by_id.failed",
            extra={"event": "db.fetch_invoice_by_id.failed", "invoice_id": invoice_id},
        )
        raise DatabaseError("Failed to fetch invoice.") from exc

    if row is None:
        return None
    return InvoiceForm(
        id=row.id,
        customer_id=row.customer_id,
        amount=to_major_units(row.amount),
        status=row.status,
    )


# ==============================================================================
# CUSTOMERS
# ==============================================================================


async def fetch_customers() -> list[CustomerField]:
    stmt = select(Customer.id, Customer.name).order_by(Customer.name.asc())
    try:
        async with get_db_session() as session:
            rows = (await session.execute(stmt)).all()
    except _DB_ERRORS as exc:
        logger.exception("db.fetch_customers.failed", extra={"event": "db.fetch_customers.failed"})
        raise DatabaseError("Failed to fetch all customers.") from exc

    return [CustomerField(id=row.id, name=row.name) for row in rows]


async def fetch_filtered_customers(query: str | None) -> list[CustomersTableRow]:
    stmt = (
        select(
            Customer.id,
            Customer.name,
            Customer.email,
            Customer.image_url,
            func.count(Invoice.id).label("total_invoices"),
            _sum_by_status(InvoiceStatus.PENDING).label("total_pending"),
            _sum_by_status(InvoiceStatus.PAID).label("total_paid"),
        )
        .select_from(Customer)
        .outerjoin(Invoice, Customer.id == Invoice.customer_id)
        .where(_customer_search(query))
        .group_by(Customer.id, Customer.name, Customer.email, Customer.image_url)
        .order_by(Customer.name.asc())
    )
    try:
        async with get_db_session() as session:
            rows = (await session.execute(stmt)).all()
    except _DB_ERRORS as exc:
        logger.exception("db.fetch_filtered_customers.failed", extra={"event": "db.fetch_filtered_customers.failed"})
        raise DatabaseError("Failed to fetch customer table.") from exc

    return [
        CustomersTableRow(
            id=row.id,
            name=row.name,
            email=row.email,
            image_url=row.image_url,
            total_invoices=int(row.total_invoices or 0),
            total_pending=format_currency(row.total_pending),
            total_paid=format_currency(row.total_paid),
        )
        for row in rows
    ]
