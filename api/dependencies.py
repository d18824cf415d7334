"""
Dependency injection setup for FastAPI.

Every collaborator is built per request: the data-client factory and the
identity provider only hold immutable settings, and services are bound to
the data client of the request that asked for them. Nothing here is a
process-wide cache, so tests substitute fakes through
``app.dependency_overrides`` without leaking between tests.
"""

from fastapi import Depends

from modules.auth.interfaces import IAuthService, IIdentityProvider
from shared.config import get_settings
from shared.database import DataClientFactory


def get_client_factory() -> DataClientFactory:
    """FastAPI dependency for the data-client factory."""
    return DataClientFactory(get_settings())


def get_identity_provider() -> IIdentityProvider:
    """FastAPI dependency for the identity provider."""
    from modules.auth.provider import SupabaseIdentityProvider
    return SupabaseIdentityProvider(get_settings())


def get_auth_service(
    identity: IIdentityProvider = Depends(get_identity_provider),
) -> IAuthService:
    """FastAPI dependency for the auth service."""
    from modules.auth.service import AuthService
    return AuthService(identity)
