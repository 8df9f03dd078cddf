# Test type: Configuration
# Validation to be executed: Shared fixtures for all test modules
# Command: pytest test/ -v (this file is auto-loaded by pytest)

"""Shared pytest fixtures for the Financial Calculator test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from fincalc.main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async HTTP client bound to the FastAPI app (no real server needed)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# ── Sample data fixtures ─────────────────────────────────────────────────

@pytest.fixture
def sip_inputs():
    """₹5,000 a month at 12 % for 10 years, as typed into the form."""
    return {"monthly": "5,000", "rate": "12", "years": "10"}


@pytest.fixture
def portfolio_funds():
    """Two holdings with whole-year holding periods as of 2024-01-01."""
    return [
        {
            "schemeName": "Alpha Flexi Cap",
            "amcName": "Alpha AMC",
            "category": "Flexi Cap",
            "investmentDate": "2023-01-01",
            "investedAmount": "1,00,000",
            "currentValue": "1,10,000",
        },
        {
            "schemeName": "Beta Index Fund",
            "amcName": "Beta AMC",
            "category": "Index",
            "investmentDate": "2022-01-01",
            "investedAmount": 50000,
            "currentValue": 60000,
        },
    ]
