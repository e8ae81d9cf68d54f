from __future__ import annotations

import asyncio
import os

os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["REVENUE_FETCH_DELAY_SECONDS"] = "0"

import pytest

import dashboard.database.db as db_module
from dashboard.database.init_db import create_tables, seed_placeholder_data


@pytest.fixture
def isolated_db(tmp_path):
    original_url = db_module.get_active_database_url()
    db_module.reset_engine(f"sqlite+aiosqlite:///{tmp_path / 'dashboard_test.db'}")
    asyncio.run(create_tables())
    yield db_module
    db_module.reset_engine(original_url)


@pytest.fixture
def seeded_db(isolated_db):
    asyncio.run(seed_placeholder_data())
    return isolated_db


@pytest.fixture
def add_rows(isolated_db):
    def _add_rows(*rows) -> None:
        async def _add() -> None:
            async with isolated_db.get_db_session() as session:
                session.add_all(rows)
                await session.commit()

        asyncio.run(_add())

    return _add_rows
