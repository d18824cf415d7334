"""
Bearer authentication dependencies.

Extracts the bearer token, resolves it to a principal through the auth
service and, for privileged routes, gates on the stored role. The
resulting AuthContext is cached by FastAPI for the rest of the request.
"""

from typing import Optional
from fastapi import Depends, Header
from fastapi.security.utils import get_authorization_scheme_param

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.database import DataClientFactory
from shared.interfaces import IDataClient
from shared.models import AuthContext, Role

from ..dependencies import get_auth_service, get_client_factory


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header value.

    Returns:
        The token, or None if the header is absent, uses another scheme,
        or carries an empty token.
    """
    if not authorization:
        return None
    scheme, token = get_authorization_scheme_param(authorization)
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


async def get_access_token(
    authorization: Optional[str] = Header(default=None),
) -> str:
    """Dependency that requires a bearer token."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise MissingTokenError()
    return token


async def get_current_context(
    token: str = Depends(get_access_token),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(context: AuthContext = Depends(get_current_context)):
            return {"user_id": context.user_id}
    """
    principal = await auth.resolve(token)
    return AuthContext(principal=principal, token=token)


async def get_user_data_client(
    context: AuthContext = Depends(get_current_context),
    clients: DataClientFactory = Depends(get_client_factory),
) -> IDataClient:
    """Data client carrying the caller's token (RLS as the caller)."""
    return await clients.scoped(context.token)


async def get_public_data_client(
    clients: DataClientFactory = Depends(get_client_factory),
) -> IDataClient:
    """Data client with no token (public RLS policy)."""
    return await clients.anonymous()


async def require_admin(
    context: AuthContext = Depends(get_current_context),
    db: IDataClient = Depends(get_user_data_client),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Dependency that requires the admin role.

    The role lookup runs through the caller's own scoped client.
    """
    principal = await auth.require_role(context.principal, Role.ADMIN, db)
    return AuthContext(principal=principal, token=context.token)


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_context)
RequireAdmin = Depends(require_admin)
