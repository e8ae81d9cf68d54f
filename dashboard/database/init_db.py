"""Create the dashboard tables and optionally load placeholder data.

Run with ``python -m dashboard.database.init_db [--seed]``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import date

from sqlalchemy import select

import dashboard.database.db as db_module
from dashboard.core.startup import bootstrap
from dashboard.database.models import Base, Customer, Invoice, Revenue

logger = logging.getLogger(__name__)

CUSTOMERS = [
    {
        "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    },
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "76d65c26-f784-44a2-ac19-586678f7c2f2",
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
    {
        "id": "cc27c14a-0acf-4f4a-a6c9-d45682c144b9",
        "name": "Amy Burns",
        "email": "amy@burns.com",
        "image_url": "/customers/amy-burns.png",
    },
    {
        "id": "13d07535-c59e-4157-a011-f8d2ef4e0cbb",
        "name": "Balazs Orban",
        "email": "balazs@orban.com",
        "image_url": "/customers/balazs-orban.png",
    },
]

# (customer index, amount in cents, status, date)
INVOICES = [
    (0, 15795, "pending", date(2022, 12, 6)),
    (1, 20348, "pending", date(2022, 11, 14)),
    (4, 3040, "paid", date(2022, 10, 29)),
    (3, 44800, "paid", date(2023, 9, 10)),
    (5, 34577, "pending", date(2023, 8, 5)),
    (2, 54246, "pending", date(2023, 7, 16)),
    (0, 666, "pending", date(2023, 6, 27)),
    (3, 32545, "paid", date(2023, 6, 9)),
    (4, 1250, "paid", date(2023, 6, 17)),
    (5, 8546, "paid", date(2023, 6, 7)),
    (1, 500, "paid", date(2023, 8, 19)),
    (5, 8945, "paid", date(2023, 6, 3)),
    (2, 1000, "paid", date(2022, 6, 5)),
]

REVENUE = [
    ("Jan", 2000),
    ("Feb", 1800),
    ("Mar", 2200),
    ("Apr", 2500),
    ("May", 2300),
    ("Jun", 3200),
    ("Jul", 3500),
    ("Aug", 3700),
    ("Sep", 2500),
    ("Oct", 2800),
    ("Nov", 3000),
    ("Dec", 4800),
]


async def create_tables() -> None:
    async with db_module.get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("db.tables.created", extra={"event": "db.tables.created"})


async def seed_placeholder_data() -> bool:
    """Insert the placeholder dataset once; returns False when it is already present."""
    async with db_module.get_db_session() as session:
        existing = await session.scalar(select(Customer.id).where(Customer.id == CUSTOMERS[0]["id"]))
        if existing is not None:
            logger.info("db.seed.skipped", extra={"event": "db.seed.skipped"})
            return False

        customers = [Customer(**row) for row in CUSTOMERS]
        session.add_all(customers)
        session.add_all(
            Invoice(customer_id=customers[index].id, amount=amount, status=status, date=issued)
            for index, amount, status, issued in INVOICES
        )
        session.add_all(Revenue(month=month, revenue=revenue) for month, revenue in REVENUE)
        try:
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    logger.info(
        "db.seed.completed",
        extra={"event": "db.seed.completed", "customers": len(CUSTOMERS), "invoices": len(INVOICES)},
    )
    return True


async def init_db(seed: bool = False) -> None:
    await bootstrap()
    try:
        await create_tables()
        if seed:
            await seed_placeholder_data()
    finally:
        await db_module.dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create dashboard tables.")
    parser.add_argument("--seed", action="store_true", help="load placeholder customers, invoices and revenue")
    args = parser.parse_args()
    asyncio.run(init_db(seed=args.seed))


if __name__ == "__main__":
    main()
