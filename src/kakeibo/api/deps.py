"""FastAPI dependency injection for authentication and database."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.exceptions import AuthenticationError
from kakeibo.core.security import get_user_id_from_token
from kakeibo.db.session import get_db
from kakeibo.models.user import User
from kakeibo.services.auth import AuthService
from kakeibo.services.household import HouseholdService

# Missing headers are reported through AuthenticationError, not HTTPBearer's own 403.
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Extract and validate user from JWT token.

    Raises:
        AuthenticationError: If token is missing, invalid, expired, or user not found
    """
    if credentials is None:
        raise AuthenticationError("AUTH_002")

    try:
        user_id = get_user_id_from_token(credentials.credentials)
    except (JWTError, ValueError):
        raise AuthenticationError("AUTH_002")

    return await auth_service.get_active_user(user_id)


async def get_household_id(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UUID:
    """Household the current user's queries are scoped to."""
    return await HouseholdService(db).resolve_household_id(current_user.id)
