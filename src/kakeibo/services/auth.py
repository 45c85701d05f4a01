"""Authentication service: sign-up, sign-in and token refresh."""

import logging
from uuid import UUID

from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kakeibo.core.exceptions import AuthenticationError, RemoteQueryError
from kakeibo.core.security import (
    create_access_token,
    create_refresh_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)
from kakeibo.models.profile import Profile
from kakeibo.models.user import User
from kakeibo.repositories.profile import ProfileRepository
from kakeibo.repositories.user import UserRepository
from kakeibo.schemas.auth import TokenPair
from kakeibo.services.household import HouseholdService

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.profile_repo = ProfileRepository(db)
        self.household_service = HouseholdService(db)

    async def signup(
        self, email: str, password: str, role: str, display_name: str | None = None
    ) -> User:
        """
        Register a new user.

        Creates the user, their profile (tagging new transactions with their
        role by default) and their membership in the shared household, all in
        one commit.

        Raises:
            AuthenticationError: If email already exists (AUTH_003)
            RemoteQueryError: If the database rejects the inserts
        """
        if await self.user_repo.email_exists(email):
            raise AuthenticationError("AUTH_003", http_status=409)

        user = User(email=email, password_hash=hash_password(password))
        try:
            self.db.add(user)
            await self.db.flush()
            self.db.add(
                Profile(
                    user_id=user.id,
                    display_name=display_name or None,
                    role=role,
                    default_tag=role,
                )
            )
            await self.household_service.join_shared_household(user.id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Sign-up failed", extra={"error_type": type(e).__name__})
            raise RemoteQueryError(
                "DB_001", {"backend_message": str(getattr(e, "orig", None) or e)}
            ) from e

        await self.db.refresh(user)
        logger.info("User signed up", extra={"user_id": str(user.id)})
        return user

    async def login(self, email: str, password: str) -> TokenPair:
        """
        Authenticate user and return JWT tokens.

        Raises:
            AuthenticationError: If credentials are invalid or the account is inactive
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("AUTH_001")

        if not user.is_active:
            raise AuthenticationError("AUTH_004", http_status=403)

        return TokenPair(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
        )

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """Generate a new token pair from a valid refresh token."""
        try:
            user_id = get_user_id_from_token(refresh_token, expected_type="refresh")
        except (JWTError, ValueError):
            raise AuthenticationError("AUTH_002")

        user = await self.get_active_user(user_id)
        return TokenPair(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
        )

    async def get_active_user(self, user_id: UUID) -> User:
        """
        Get user by ID for authenticated requests.

        Raises:
            AuthenticationError: If user not found (AUTH_002) or inactive (AUTH_004)
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("AUTH_002")
        if not user.is_active:
            raise AuthenticationError("AUTH_004", http_status=403)
        return user

    async def get_profile(self, user_id: UUID) -> Profile | None:
        return await self.profile_repo.get_by_user(user_id)
