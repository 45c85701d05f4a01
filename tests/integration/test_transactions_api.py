"""Integration tests for transaction listing and ownership tagging."""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.security import create_access_token, hash_password
from kakeibo.models.user import User
from kakeibo.repositories.household import HouseholdRepository


@pytest.fixture
async def outsider_headers(db_session: AsyncSession) -> dict:
    """A user who belongs to a different household."""
    user = User(email="neighbour@example.com", password_hash=hash_password("password123"))
    db_session.add(user)
    await db_session.flush()
    repo = HouseholdRepository(db_session)
    household = await repo.get_or_create(uuid4(), "Neighbours")
    await repo.add_member(user.id, household.id)
    await db_session.commit()
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


async def list_transactions(client: AsyncClient, headers: dict, statement_id: str, **params):
    return await client.get(
        f"/api/v1/statements/{statement_id}/transactions", headers=headers, params=params
    )


class TestListTransactions:
    @pytest.mark.asyncio
    async def test_list(self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict):
        response = await list_transactions(client, auth_headers, uploaded_statement["statement_id"])

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert Decimal(data["total_amount"]) == Decimal("5190")
        assert data["money"] == {"currency": "JPY", "minor_unit": 0}
        dates = [t["posting_date"] for t in data["transactions"]]
        assert dates == sorted(dates)
        assert {t["ownership_tag"] for t in data["transactions"]} == {"shared"}

    @pytest.mark.asyncio
    async def test_unknown_statement(self, client: AsyncClient, auth_headers: dict):
        response = await list_transactions(client, auth_headers, str(uuid4()))

        assert response.status_code == 404
        assert response.json()["error_code"] == "API_003"


class TestOwnershipTag:
    @pytest.mark.asyncio
    async def test_set_tag_and_filter(
        self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict
    ):
        statement_id = uploaded_statement["statement_id"]
        listing = await list_transactions(client, auth_headers, statement_id)
        first = listing.json()["transactions"][0]

        response = await client.patch(
            f"/api/v1/transactions/{first['id']}/tag",
            json={"tag": "papa"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["ownership_tag"] == "papa"

        papa = await list_transactions(client, auth_headers, statement_id, tag="papa")
        assert papa.json()["count"] == 1
        assert papa.json()["transactions"][0]["id"] == first["id"]
        assert Decimal(papa.json()["total_amount"]) == Decimal(first["amount"])

        shared = await list_transactions(client, auth_headers, statement_id, tag="shared")
        assert shared.json()["count"] == 2

    @pytest.mark.asyncio
    async def test_last_write_wins(
        self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict
    ):
        listing = await list_transactions(client, auth_headers, uploaded_statement["statement_id"])
        txn_id = listing.json()["transactions"][0]["id"]

        for tag in ("papa", "mama"):
            await client.patch(
                f"/api/v1/transactions/{txn_id}/tag", json={"tag": tag}, headers=auth_headers
            )

        listing = await list_transactions(client, auth_headers, uploaded_statement["statement_id"])
        assert listing.json()["transactions"][0]["ownership_tag"] == "mama"

    @pytest.mark.asyncio
    async def test_invalid_tag(
        self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict
    ):
        listing = await list_transactions(client, auth_headers, uploaded_statement["statement_id"])
        txn_id = listing.json()["transactions"][0]["id"]

        response = await client.patch(
            f"/api/v1/transactions/{txn_id}/tag", json={"tag": "grandma"}, headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_transaction(self, client: AsyncClient, auth_headers: dict):
        response = await client.patch(
            f"/api/v1/transactions/{uuid4()}/tag", json={"tag": "papa"}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "API_004"


class TestHouseholdScoping:
    @pytest.mark.asyncio
    async def test_other_household_cannot_see_or_tag(
        self,
        client: AsyncClient,
        auth_headers: dict,
        outsider_headers: dict,
        uploaded_statement: dict,
    ):
        statement_id = uploaded_statement["statement_id"]
        listing = await list_transactions(client, auth_headers, statement_id)
        txn_id = listing.json()["transactions"][0]["id"]

        statements = await client.get("/api/v1/statements", headers=outsider_headers)
        assert statements.json()["statements"] == []

        response = await list_transactions(client, outsider_headers, statement_id)
        assert response.status_code == 404

        response = await client.patch(
            f"/api/v1/transactions/{txn_id}/tag", json={"tag": "papa"}, headers=outsider_headers
        )
        assert response.status_code == 404

        response = await client.delete(
            f"/api/v1/statements/{statement_id}", headers=outsider_headers
        )
        assert response.status_code == 404
