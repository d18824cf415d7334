"""
Supabase Auth identity provider.

Wraps the remote "who is this token", sign-in and sign-up calls and
normalizes their failures. Every call is bounded by
IDENTITY_TIMEOUT_SECONDS and never retried.
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional

import httpx
from supabase import AsyncClient, AsyncClientOptions, AuthApiError, AuthRetryableError, acreate_client

from shared.config import Settings, get_settings
from shared.exceptions import UpstreamUnavailableError
from shared.models import Principal

from .exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
    RegistrationError,
)
from .models import SignUpResult

logger = logging.getLogger(__name__)

SERVICE_NAME = "identity provider"


class SupabaseIdentityProvider:
    """Identity provider backed by Supabase Auth (GoTrue)."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    async def _client(self) -> AsyncClient:
        settings = self._settings
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        return await acreate_client(
            settings.supabase_url,
            settings.supabase_anon_key,
            options=AsyncClientOptions(auto_refresh_token=False, persist_session=False),
        )

    async def _call(self, operation: str, call: Awaitable[Any]) -> Any:
        """Await a provider call, mapping transport failures to UpstreamUnavailableError."""
        try:
            return await asyncio.wait_for(call, timeout=self._settings.identity_timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.warning(f"Identity provider timed out during {operation}")
            raise UpstreamUnavailableError(SERVICE_NAME) from e
        except AuthRetryableError as e:
            logger.warning(f"Identity provider unavailable during {operation}: {e}")
            raise UpstreamUnavailableError(SERVICE_NAME) from e
        except httpx.HTTPError as e:
            logger.warning(f"Identity provider unreachable during {operation}: {e}")
            raise UpstreamUnavailableError(SERVICE_NAME) from e
        except AuthApiError as e:
            if (getattr(e, "status", None) or 0) >= 500:
                logger.warning(f"Identity provider error during {operation}: {e}")
                raise UpstreamUnavailableError(SERVICE_NAME) from e
            raise

    async def get_user(self, token: str) -> Principal:
        client = await self._client()
        try:
            response = await self._call("get_user", client.auth.get_user(token))
        except AuthApiError as e:
            raise InvalidTokenError(e.message or "Invalid authentication token") from e

        if response is None or response.user is None:
            raise InvalidTokenError()

        return Principal(id=response.user.id, email=response.user.email or "")

    async def sign_in(self, email: str, password: str) -> str:
        client = await self._client()
        try:
            response = await self._call(
                "sign_in",
                client.auth.sign_in_with_password({"email": email, "password": password}),
            )
        except AuthApiError as e:
            raise InvalidCredentialsError() from e

        if response.session is None:
            raise InvalidCredentialsError("Failed to create session")
        return response.session.access_token

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        client = await self._client()
        try:
            response = await self._call(
                "sign_up",
                client.auth.sign_up({"email": email, "password": password}),
            )
        except AuthApiError as e:
            if getattr(e, "code", None) == "user_already_exists":
                raise EmailAlreadyRegisteredError() from e
            raise RegistrationError() from e

        if response.user is None:
            raise RegistrationError("Failed to create user")

        return SignUpResult(
            user_id=response.user.id,
            access_token=response.session.access_token if response.session else None,
        )
