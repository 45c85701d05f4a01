"""Integration tests for month comments and categories."""

import pytest
from httpx import AsyncClient


class TestComments:
    @pytest.mark.asyncio
    async def test_add_and_list(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/v1/comments",
            json={"year_month": "2025-01", "content": "  外食が多かった  "},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["content"] == "外食が多かった"

        await client.post(
            "/api/v1/comments",
            json={"year_month": "2025-02", "content": "other month"},
            headers=auth_headers,
        )

        listing = await client.get(
            "/api/v1/comments", params={"ym": "2025-01"}, headers=auth_headers
        )
        assert listing.status_code == 200
        assert [c["content"] for c in listing.json()] == ["外食が多かった"]

    @pytest.mark.asyncio
    async def test_blank_comment_rejected(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/v1/comments",
            json={"year_month": "2025-01", "content": "   "},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_004"

    @pytest.mark.asyncio
    async def test_invalid_month_rejected(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/v1/comments",
            json={"year_month": "2025-13", "content": "hello"},
            headers=auth_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient, db_session):
        response = await client.get("/api/v1/comments", params={"ym": "2025-01"})

        assert response.status_code == 401


class TestCategories:
    @pytest.mark.asyncio
    async def test_created_from_upload(
        self, client: AsyncClient, auth_headers: dict, uploaded_statement: dict
    ):
        response = await client.get("/api/v1/categories", headers=auth_headers)

        assert response.status_code == 200
        assert sorted(c["name"] for c in response.json()) == ["交通", "外食", "食料品"]
