from __future__ import annotations

import asyncio

from dashboard.database import queries
from dashboard.database.init_db import CUSTOMERS, INVOICES, seed_placeholder_data


def test_seed_is_idempotent(isolated_db):
    assert asyncio.run(seed_placeholder_data()) is True
    assert asyncio.run(seed_placeholder_data()) is False

    cards = asyncio.run(queries.fetch_card_data())
    assert cards.number_of_customers == len(CUSTOMERS)
    assert cards.number_of_invoices == len(INVOICES)
