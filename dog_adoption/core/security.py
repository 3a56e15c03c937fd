# =============================================================================
# DOG ADOPTION PLATFORM API - CORE SECURITY MODULE
# =============================================================================
# File: core/security.py
# Description: Password hashing and JWT management
#              Argon2id with Bcrypt fallback, stateless HS256/RS256 tokens
# =============================================================================

from typing import Optional, Literal
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from passlib.context import CryptContext
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, InvalidHash, VerificationError
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import BaseModel

from dog_adoption.core.config import Settings
from dog_adoption.core.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
)


# =============================================================================
# PASSWORD HASHER CONFIGURATION
# =============================================================================

class PasswordManager:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    PASSWORD HASHING MANAGER                              │
    │  Argon2id for new hashes, Bcrypt accepted for verification              │
    │  Flags hashes that should be upgraded on the next successful login     │
    └─────────────────────────────────────────────────────────────────────────┘

    Algorithm Selection:
        - Primary:  Argon2id (salt: 16 random bytes per hash)
        - Fallback: Bcrypt (when configured, or for hashes already stored)
    """

    def __init__(self, settings: Settings):
        """Initialize password manager with configured algorithms."""

        self._argon2_hasher = PasswordHasher(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
            hash_len=32,
            salt_len=16,
        )

        self._bcrypt_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.bcrypt_rounds,
        )

        self._preferred_algorithm = settings.password_hash_algorithm
        self._dummy_hash: Optional[str] = None

    def hash_password(self, password: str) -> str:
        """
        Hash a password using the configured algorithm.

        Args:
            password: Plain text password to hash

        Returns:
            str: Hashed password string (salt embedded)
        """
        if self._preferred_algorithm == "argon2":
            return self._argon2_hasher.hash(password)
        return self._bcrypt_context.hash(password)

    def verify_password(
        self,
        plain_password: str,
        hashed_password: str
    ) -> tuple[bool, bool]:
        """
        Verify a password against its hash with algorithm detection.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored password hash

        Returns:
            tuple[bool, bool]: (is_valid, needs_rehash)
                - is_valid: True if password matches
                - needs_rehash: True if the hash should be regenerated with
                  the current algorithm/parameters
        """
        if hashed_password.startswith("$argon2"):
            try:
                self._argon2_hasher.verify(hashed_password, plain_password)
            except (VerifyMismatchError, VerificationError, InvalidHash):
                return False, False

            needs_rehash = (
                self._preferred_algorithm != "argon2"
                or self._argon2_hasher.check_needs_rehash(hashed_password)
            )
            return True, needs_rehash

        if hashed_password.startswith("$2"):
            try:
                is_valid = self._bcrypt_context.verify(plain_password, hashed_password)
            except ValueError:
                return False, False
            return is_valid, is_valid and self._preferred_algorithm == "argon2"

        # Unknown hash format
        return False, False

    def verify_dummy(self, plain_password: str) -> None:
        """
        Burn one verification against a throwaway hash.

        Called when the username is unknown so that the response time
        does not reveal whether the account exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash_password(uuid4().hex)
        self.verify_password(plain_password, self._dummy_hash)


# =============================================================================
# JWT TOKEN PAYLOAD MODEL
# =============================================================================

class TokenPayload(BaseModel):
    """
    JWT Token payload structure for type-safe token handling.

    Attributes:
        sub: Subject (user ID)
        jti: Unique token identifier
        type: Token type
        iat: Issued at timestamp
        exp: Expiration timestamp
    """
    sub: str
    jti: str
    type: Literal["access"] = "access"
    iat: datetime
    exp: datetime


# =============================================================================
# JWT TOKEN MANAGER
# =============================================================================

class JWTManager:
    """
    ┌─────────────────────────────────────────────────────────────────────────┐
    │                    JWT TOKEN MANAGER                                     │
    │  Issues and validates signed, time-bound bearer tokens                  │
    │  Supports both symmetric (HS*) and asymmetric (RS*) algorithms         │
    └─────────────────────────────────────────────────────────────────────────┘

    Validation is stateless: signature, expiry and token type only. No
    server-side session or blacklist is consulted.
    """

    def __init__(self, settings: Settings):
        """Initialize JWT manager with configured settings."""
        self._secret_key = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._expire = timedelta(minutes=settings.jwt_expire_minutes)

        self._private_key: Optional[str] = None
        self._public_key: Optional[str] = None

        if self._algorithm.startswith("RS"):
            self._load_rsa_keys(settings)

    def _load_rsa_keys(self, settings: Settings) -> None:
        """Load RSA keys from configured paths."""
        if not settings.jwt_private_key_path or not settings.jwt_public_key_path:
            raise ValueError(
                f"{self._algorithm} requires JWT_PRIVATE_KEY_PATH and JWT_PUBLIC_KEY_PATH"
            )

        with open(settings.jwt_private_key_path, "r") as f:
            self._private_key = f.read()

        with open(settings.jwt_public_key_path, "r") as f:
            self._public_key = f.read()

    def _get_signing_key(self) -> str:
        """Get the appropriate signing key based on algorithm."""
        if self._private_key:
            return self._private_key
        return self._secret_key

    def _get_verification_key(self) -> str:
        """Get the appropriate verification key based on algorithm."""
        if self._public_key:
            return self._public_key
        return self._secret_key

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return int(self._expire.total_seconds())

    def create_token(
        self,
        user_id: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create an access token for a user.

        Args:
            user_id: User identifier (subject)
            expires_delta: Override of the configured lifetime

        Returns:
            str: Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._expire)

        claims = {
            "sub": user_id,
            "jti": str(uuid4()),
            "type": "access",
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(
            claims,
            self._get_signing_key(),
            algorithm=self._algorithm
        )

    def decode_token(self, token: str) -> TokenPayload:
        """
        Decode and validate a JWT token.

        Args:
            token: Encoded JWT token

        Returns:
            TokenPayload: Decoded and validated token payload

        Raises:
            TokenExpiredError: If token has expired
            TokenInvalidError: If token is malformed, badly signed or of the
                wrong type
        """
        try:
            payload = jwt.decode(
                token,
                self._get_verification_key(),
                algorithms=[self._algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise TokenInvalidError()

        if payload.get("type") != "access" or not payload.get("sub"):
            raise TokenInvalidError()

        return TokenPayload(
            sub=payload["sub"],
            jti=payload.get("jti", ""),
            type="access",
            iat=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
            exp=datetime.fromtimestamp(payload.get("exp", 0), tz=timezone.utc),
        )
