"""
Fixtures for the HTTP API tests.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from usergroups.api.app import create_app


@pytest_asyncio.fixture
async def client(server_settings, clean_database):
    app = create_app(settings=server_settings, manager=clean_database)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


@pytest_asyncio.fixture
def user_payload():
    yield {
        "name": "Ada",
        "surname": "Lovelace",
        "birth_date": "1815-12-10",
        "sex": "female",
    }
