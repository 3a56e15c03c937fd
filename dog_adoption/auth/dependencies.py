# =============================================================================
# DOG ADOPTION PLATFORM API - AUTH DEPENDENCIES
# =============================================================================
# File: auth/dependencies.py
# Description: FastAPI dependencies for authentication and data access
#              Every resource is taken from the AppContext on app.state
# =============================================================================

from typing import Optional, Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.auth.service import AuthService
from dog_adoption.core.context import AppContext
from dog_adoption.dogs.service import DogService


# =============================================================================
# SECURITY SCHEME
# =============================================================================

# Missing/malformed headers are reported by AuthService, not by FastAPI
bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="JWT access token",
    auto_error=False,
)


# =============================================================================
# CONTEXT DEPENDENCIES
# =============================================================================

def get_app_context(request: Request) -> AppContext:
    """
    Dependency for the application context built at startup.

    Returns:
        AppContext: Context stored on ``app.state.context``
    """
    return request.app.state.context


Context = Annotated[AppContext, Depends(get_app_context)]


async def get_db_session_dep(context: Context) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for database session.

    Yields:
        AsyncSession: Database session with auto-commit/rollback
    """
    async with context.db.get_session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session_dep)]


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

async def get_auth_service(
    session: DBSession,
    context: Context,
) -> AuthService:
    """
    Dependency for authentication service.

    Args:
        session: Database session
        context: Application context

    Returns:
        AuthService: Configured auth service
    """
    return AuthService(
        session,
        password_manager=context.password_manager,
        jwt_manager=context.jwt_manager,
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_dog_service(session: DBSession) -> DogService:
    """Dependency for the listing service."""
    return DogService(session)


DogServiceDep = Annotated[DogService, Depends(get_dog_service)]


# =============================================================================
# TOKEN VALIDATION
# =============================================================================

async def get_token_from_header(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Extract JWT token from ``Authorization: Bearer <token>``.

    Returns:
        Optional token string
    """
    if credentials is None:
        return None
    return credentials.credentials


Token = Annotated[Optional[str], Depends(get_token_from_header)]


async def get_current_user_id(
    token: Token,
    auth_service: AuthServiceDep,
) -> str:
    """
    Authenticate the request and return the caller's user id.

    Raises:
        TokenMissingError: If no bearer token was sent
        TokenInvalidError: If the token does not verify
    """
    return auth_service.authenticate(token)


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
