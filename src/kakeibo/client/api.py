"""Async client for the Kakeibo HTTP API.

One ``KakeiboClient`` is built from ``ClientSettings`` and handed to whatever
needs the backend (the transaction board, scripts). It owns a single
``httpx.AsyncClient`` and keeps the access token for later calls.
"""

import logging
from typing import Any
from urllib.parse import quote
from uuid import UUID

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ClientSettings(BaseSettings):
    """Client configuration, read from ``KAKEIBO_*`` environment variables."""

    base_url: str = "http://localhost:8000"
    timeout: float = 30.0

    model_config = SettingsConfigDict(env_prefix="KAKEIBO_", extra="ignore")


class ApiError(Exception):
    """A failed API call.

    Non-2xx responses carry the server's error body. Calls that never got a
    response (connection refused, timeout) have status 0 and code NETWORK.
    """

    def __init__(self, status: int, error_code: str, message: str, details: dict | None = None):
        self.status = status
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(f"{error_code}: {message}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        details = body.get("details") or {}
        # Database failures carry the backend's own text; show that.
        message = (
            details.get("backend_message")
            or body.get("user_message")
            or body.get("message")
            or response.reason_phrase
        )
        return cls(
            status=response.status_code,
            error_code=body.get("error_code", "UNKNOWN"),
            message=message,
            details=details,
        )


class KakeiboClient:
    def __init__(
        self,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or ClientSettings()
        self._http = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            transport=transport,
        )
        self.access_token: str | None = None
        self.refresh_token: str | None = None

    async def __aenter__(self) -> "KakeiboClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        if self.access_token:
            return {"Authorization": f"Bearer {self.access_token}"}
        return {}

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                "API request failed",
                extra={"method": method, "path": path, "error_type": type(e).__name__},
            )
            raise ApiError(0, "NETWORK", str(e) or type(e).__name__) from e
        if response.is_error:
            error = ApiError.from_response(response)
            logger.warning(
                "API request failed",
                extra={"method": method, "path": path, "status_code": response.status_code,
                       "error_code": error.error_code},
            )
            raise error
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Auth

    async def signup(
        self, email: str, password: str, role: str = "papa", display_name: str | None = None
    ) -> dict:
        payload = {"email": email, "password": password, "role": role}
        if display_name:
            payload["display_name"] = display_name
        return await self._request("POST", "/api/v1/auth/signup", json=payload)

    async def login(self, email: str, password: str) -> dict:
        """Sign in and keep the tokens for subsequent calls."""
        tokens = await self._request(
            "POST", "/api/v1/auth/login", json={"email": email, "password": password}
        )
        self.access_token = tokens["access_token"]
        self.refresh_token = tokens["refresh_token"]
        return tokens

    async def refresh(self) -> dict:
        tokens = await self._request(
            "POST", "/api/v1/auth/refresh", json={"refresh_token": self.refresh_token}
        )
        self.access_token = tokens["access_token"]
        self.refresh_token = tokens["refresh_token"]
        return tokens

    async def me(self) -> dict:
        return await self._request("GET", "/api/v1/auth/me")

    # Statements

    async def preview_statement(self, data: bytes, filename: str | None = None) -> dict:
        return await self._request(
            "POST", "/api/v1/statements/preview", content=data, headers=_csv_headers(filename)
        )

    async def upload_statement(
        self,
        data: bytes,
        filename: str | None = None,
        year: int | None = None,
        month: int | None = None,
        source: str | None = None,
    ) -> dict:
        params = {k: v for k, v in {"year": year, "month": month, "source": source}.items() if v}
        return await self._request(
            "POST",
            "/api/v1/statements/upload",
            content=data,
            params=params,
            headers=_csv_headers(filename),
        )

    async def list_statements(self) -> list[dict]:
        body = await self._request("GET", "/api/v1/statements")
        return body["statements"]

    async def delete_statement(self, statement_id: UUID | str) -> None:
        await self._request("DELETE", f"/api/v1/statements/{statement_id}")

    async def list_transactions(
        self, statement_id: UUID | str, tag: str | None = None
    ) -> dict:
        params = {"tag": tag} if tag else None
        return await self._request(
            "GET", f"/api/v1/statements/{statement_id}/transactions", params=params
        )

    async def set_ownership_tag(self, transaction_id: UUID | str, tag: str) -> dict:
        return await self._request(
            "PATCH", f"/api/v1/transactions/{transaction_id}/tag", json={"tag": tag}
        )

    # Charts and comments

    async def monthly_totals(self) -> dict:
        return await self._request("GET", "/api/v1/analytics/monthly")

    async def category_breakdown(self, year_month: str | None = None) -> dict:
        params = {"ym": year_month} if year_month else None
        return await self._request("GET", "/api/v1/analytics/categories", params=params)

    async def list_comments(self, year_month: str) -> list[dict]:
        return await self._request("GET", "/api/v1/comments", params={"ym": year_month})

    async def add_comment(self, year_month: str, content: str) -> dict:
        return await self._request(
            "POST", "/api/v1/comments", json={"year_month": year_month, "content": content}
        )

    async def list_categories(self) -> list[dict]:
        return await self._request("GET", "/api/v1/categories")


def _csv_headers(filename: str | None) -> dict[str, str]:
    headers = {"Content-Type": "text/csv"}
    if filename:
        headers["X-Filename"] = quote(filename)
    return headers
