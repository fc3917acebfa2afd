"""
Demo calculation inputs for API tests — FY 2023-24 schedules.

Payloads use the camelCase wire format the frontend sends. Expected values
are hand-computed from the slab tables; comments show the working.
"""
from __future__ import annotations

from typing import Any

from httpx import AsyncClient

# ---------------------------------------------------------------------------
# New regime, ₹10L, no HRA
# ---------------------------------------------------------------------------
# taxable = 1000000 - 0 - 50000 = 950000
# slab: 45000 + (950000-900000)*0.15 = 52500, no rebate (>7L)
# cess = 2100, total = 54600, effective = 5.46%
NEW_10L: dict[str, Any] = {
    "financialYear": "2023-24",
    "regime": "new",
    "income": 1_000_000,
    "hraExempt": 0,
}
NEW_10L_EXPECTED: dict[str, Any] = {
    "taxableIncome": 950_000,
    "tax": 52_500,
    "cess": 2_100,
    "totalTax": 54_600,
    "effectiveTaxRate": 5.46,
    "deductions": 0,
}

# ---------------------------------------------------------------------------
# Old regime, below 60, ₹8L, nothing claimed
# ---------------------------------------------------------------------------
# taxable = 800000, exemption 250000 → adjusted 550000
# slab: 12500 + 50000*0.20 = 22500, no rebate (adjusted > 5L)
# cess = 900, total = 23400, effective = 2.925%
OLD_8L: dict[str, Any] = {
    "financialYear": "2023-24",
    "ageGroup": "below-60",
    "regime": "old",
    "income": 800_000,
    "hraExempt": 0,
    "deductions": {},
    "investments": {},
}
OLD_8L_EXPECTED: dict[str, Any] = {
    "taxableIncome": 800_000,
    "tax": 22_500,
    "cess": 900,
    "totalTax": 23_400,
    "effectiveTaxRate": 2.925,
    "deductions": 0,
}

# ---------------------------------------------------------------------------
# Old regime, 60-80, form as submitted untouched — empty strings everywhere
# ---------------------------------------------------------------------------
# 80C pool: 100000 + ppf 60000 = 160000 → capped 150000
# + 80D 25000 → 175000, NPS 70000 → 50000 → deductions 225000
# taxable = 1500000 - 120000 - 225000 = 1155000
# exemption 300000 → adjusted 855000 → 12500 + 355000*0.20 = 83500
# cess = 3340, total = 86840
OLD_SENIOR_FORM: dict[str, Any] = {
    "financialYear": "2024-25",
    "ageGroup": "60-80",
    "regime": "old",
    "income": 1_500_000,
    "hraExempt": 120_000,
    "deductions": {
        "section80c": 100_000,
        "section80d": 25_000,
        "section80e": "",
        "section80g": "",
        "otherDeductions": "",
    },
    "investments": {
        "ppf": 60_000,
        "elss": "",
        "nps": 70_000,
        "fd": "",
        "homeLoan": "",
    },
}
OLD_SENIOR_FORM_EXPECTED: dict[str, Any] = {
    "taxableIncome": 1_155_000,
    "tax": 83_500,
    "cess": 3_340,
    "totalTax": 86_840,
    "deductions": 225_000,
}


async def register_user(
    client: AsyncClient,
    email: str = "asha@example.com",
    password: str = "secret123",
    name: str = "Asha",
) -> dict[str, str]:
    """Register a user and return the auth header dict for later requests."""
    response = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"x-auth-token": response.json()["token"]}
