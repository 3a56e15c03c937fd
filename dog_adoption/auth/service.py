# =============================================================================
# DOG ADOPTION PLATFORM API - AUTH SERVICE
# =============================================================================
# File: auth/service.py
# Description: Business logic layer for authentication operations
#              Orchestrates the user repository and the security helpers
# =============================================================================

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.auth.repository import UserRepository
from dog_adoption.auth.schemas import AuthData, UserPublic, UserProfile
from dog_adoption.core.security import PasswordManager, JWTManager
from dog_adoption.core.exceptions import (
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
    TokenMissingError,
)


logger = logging.getLogger(__name__)


class AuthService:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    AUTHENTICATION SERVICE                                │
    │  Business logic layer handling all authentication operations            │
    │  Coordinates between the user repository and the crypto helpers        │
    └─────────────────────────────────────────────────────────────────────────┘

    Responsibilities:
        - User registration
        - Login with a uniform failure for unknown user and wrong password
        - Token verification for protected routes
        - Profile lookup
    """

    def __init__(
        self,
        session: AsyncSession,
        password_manager: PasswordManager,
        jwt_manager: JWTManager,
    ):
        """
        Initialize service with database session and security helpers.

        Args:
            session: SQLAlchemy async session
            password_manager: Password hasher/verifier
            jwt_manager: Token issuer/verifier
        """
        self._session = session
        self._user_repo = UserRepository(session)
        self._passwords = password_manager
        self._jwt = jwt_manager

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    async def register(self, username: str, password: str) -> AuthData:
        """
        Register a new user and issue a token.

        Args:
            username: Validated username
            password: Plain text password

        Returns:
            AuthData: Token and public user fields

        Raises:
            UserExistsError: If the username is already taken
        """
        if await self._user_repo.exists_username(username):
            raise UserExistsError()

        password_hash = self._passwords.hash_password(password)

        try:
            user = await self._user_repo.create(
                username=username,
                password_hash=password_hash,
            )
        except IntegrityError:
            # Lost a race against a concurrent registration
            raise UserExistsError()

        logger.info(f"User registered: {user.id}")

        return AuthData(
            token=self._jwt.create_token(user.id),
            user=UserPublic.model_validate(user),
        )

    # =========================================================================
    # LOGIN
    # =========================================================================

    async def login(self, username: str, password: str) -> AuthData:
        """
        Authenticate by username and password.

        Flow:
            1. Look up the user
            2. Verify password (dummy verification if the user is unknown)
            3. Upgrade the stored hash if its parameters are outdated
            4. Issue token

        Raises:
            InvalidCredentialsError: Unknown username or wrong password
        """
        user = await self._user_repo.get_by_username(username)

        if user is None:
            self._passwords.verify_dummy(password)
            logger.warning("Login failed: unknown username")
            raise InvalidCredentialsError()

        is_valid, needs_rehash = self._passwords.verify_password(
            password,
            user.password_hash,
        )
        if not is_valid:
            logger.warning(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        if needs_rehash:
            await self._user_repo.update_password(
                user,
                self._passwords.hash_password(password),
            )
            logger.info(f"Password hash upgraded for user {user.id}")

        logger.info(f"User logged in: {user.id}")

        return AuthData(
            token=self._jwt.create_token(user.id),
            user=UserPublic.model_validate(user),
        )

    # =========================================================================
    # TOKEN VERIFICATION
    # =========================================================================

    def authenticate(self, token: Optional[str]) -> str:
        """
        Resolve a bearer token to a user id.

        Only signature, expiry and token type are checked.

        Raises:
            TokenMissingError: No token supplied
            TokenInvalidError: Malformed, badly signed or expired token
        """
        if not token:
            raise TokenMissingError()
        return self._jwt.decode_token(token).sub

    # =========================================================================
    # PROFILE
    # =========================================================================

    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Get public profile fields of a user.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return UserProfile.model_validate(user)
