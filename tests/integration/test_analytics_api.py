"""Integration tests for chart aggregates."""

from decimal import Decimal

import pytest
from httpx import AsyncClient


async def tag(client: AsyncClient, headers: dict, statement_id: str, merchant: str, value: str):
    listing = await client.get(
        f"/api/v1/statements/{statement_id}/transactions", headers=headers
    )
    txn = next(t for t in listing.json()["transactions"] if t["description"] == merchant)
    response = await client.patch(
        f"/api/v1/transactions/{txn['id']}/tag", json={"tag": value}, headers=headers
    )
    assert response.status_code == 200


class TestMonthly:
    @pytest.mark.asyncio
    async def test_empty(self, client: AsyncClient, auth_headers: dict):
        response = await client.get("/api/v1/analytics/monthly", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["months"] == []
        assert response.json()["latest_year_month"] is None

    @pytest.mark.asyncio
    async def test_buckets(
        self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict
    ):
        statement_id = uploaded_statement["statement_id"]
        await tag(client, auth_headers, statement_id, "スーパーマルエツ", "papa")
        await tag(client, auth_headers, statement_id, "JR東日本", "mama")

        response = await client.get("/api/v1/analytics/monthly", headers=auth_headers)

        data = response.json()
        assert data["latest_year_month"] == "2025-01"
        month = data["months"][0]
        assert month["year_month"] == "2025-01"
        assert Decimal(month["total"]) == Decimal("5190")
        assert Decimal(month["papa"]) == Decimal("3210")
        assert Decimal(month["mama"]) == Decimal("1000")
        assert Decimal(month["shared"]) == Decimal("980")

    @pytest.mark.asyncio
    async def test_months_ascending(
        self, client: AsyncClient, auth_headers: dict, sample_csv: str
    ):
        for month in (3, 1):
            await client.post(
                "/api/v1/statements/upload",
                content=sample_csv.encode(),
                params={"year": 2025, "month": month},
                headers={**auth_headers, "Content-Type": "text/csv"},
            )

        response = await client.get("/api/v1/analytics/monthly", headers=auth_headers)

        assert [m["year_month"] for m in response.json()["months"]] == ["2025-01", "2025-03"]


class TestCategories:
    @pytest.mark.asyncio
    async def test_defaults_to_latest_month(
        self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict
    ):
        response = await client.get("/api/v1/analytics/categories", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["year_month"] == "2025-01"
        assert [c["category"] for c in data["categories"]] == ["食料品", "交通", "外食"]
        assert Decimal(data["categories"][0]["total"]) == Decimal("3210")

    @pytest.mark.asyncio
    async def test_explicit_month_without_data(
        self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict
    ):
        response = await client.get(
            "/api/v1/analytics/categories", params={"ym": "2020-01"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["categories"] == []

    @pytest.mark.asyncio
    async def test_invalid_month(self, client: AsyncClient, auth_headers: dict):
        response = await client.get(
            "/api/v1/analytics/categories", params={"ym": "2025-1"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "API_005"

    @pytest.mark.asyncio
    async def test_empty_household(self, client: AsyncClient, auth_headers: dict):
        response = await client.get("/api/v1/analytics/categories", headers=auth_headers)

        assert response.json()["year_month"] is None
        assert response.json()["categories"] == []
