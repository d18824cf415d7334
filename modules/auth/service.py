"""
Authentication service implementation.

Resolves bearer tokens through the identity provider and gates requests
on the role stored in the application's users table.
"""

import logging

import jwt

from shared.interfaces import IDataClient
from shared.models import AuthorizedPrincipal, Principal, Role

from .interfaces import IAuthService, IIdentityProvider
from .models import LoginRequest, ProfileUpdateRequest, RegisterRequest, TokenResponse, UserProfile
from .exceptions import (
    EmptyProfileUpdateError,
    ExpiredTokenError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingTokenError,
    ProfileNotFoundError,
    UsernameTakenError,
)

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id, username, name, role, profile_pic, introduction"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Token validity is always decided by the identity provider; the role is
    always read from the users table through a client scoped to the same
    token, never from token claims.
    """

    def __init__(self, identity: IIdentityProvider):
        self._identity = identity

    async def resolve(self, token: str) -> Principal:
        """
        Validate a bearer token and return the authenticated principal.

        Malformed or already-expired tokens are rejected locally before the
        provider round trip.
        """
        if not token:
            raise MissingTokenError()

        self._precheck(token)
        return await self._identity.get_user(token)

    @staticmethod
    def _precheck(token: str) -> None:
        try:
            jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": True},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

    async def require_role(
        self,
        principal: Principal,
        required_role: Role,
        db: IDataClient,
    ) -> AuthorizedPrincipal:
        rows = await db.select("users", "id, role", {"id": principal.id})
        if not rows:
            raise ProfileNotFoundError(principal.id)

        stored = rows[0].get("role") or Role.USER.value
        try:
            role = Role(stored)
        except ValueError:
            raise InsufficientPermissionsError(required_role.value, str(stored))

        if not role.satisfies(required_role):
            raise InsufficientPermissionsError(required_role.value, role.value)

        return AuthorizedPrincipal(id=principal.id, email=principal.email, role=role)

    async def login(self, request: LoginRequest) -> TokenResponse:
        access_token = await self._identity.sign_in(request.email, request.password)
        return TokenResponse(access_token=access_token)

    async def register(self, request: RegisterRequest, db: IDataClient) -> UserProfile:
        """
        Create the identity and its users row.

        Args:
            request: Registration details
            db: Admin data client; username uniqueness spans every profile
        """
        existing = await db.select("users", "id", {"username": request.username})
        if existing:
            raise UsernameTakenError(request.username)

        result = await self._identity.sign_up(request.email, request.password)

        row = await db.insert(
            "users",
            {
                "id": result.user_id,
                "username": request.username,
                "name": request.name,
                "role": Role.USER.value,
            },
        )
        logger.info(f"Registered user {result.user_id}")
        return self._map_to_profile(row, request.email)

    async def get_profile(self, principal: Principal, db: IDataClient) -> UserProfile:
        rows = await db.select("users", PROFILE_COLUMNS, {"id": principal.id})
        if not rows:
            raise ProfileNotFoundError(principal.id)
        return self._map_to_profile(rows[0], principal.email)

    async def update_profile(
        self,
        principal: Principal,
        request: ProfileUpdateRequest,
        db: IDataClient,
    ) -> UserProfile:
        """
        Change the caller's own name and introduction.

        Args:
            principal: Resolved caller
            request: Fields to change
            db: Data client scoped to the caller's token; the users policy
                only lets a user update their own row
        """
        patch = request.to_patch()
        if not patch:
            raise EmptyProfileUpdateError()

        row = await db.update("users", patch, {"id": principal.id})
        if row is None:
            raise ProfileNotFoundError(principal.id)
        logger.info(f"Updated profile {principal.id}: {sorted(patch)}")
        return self._map_to_profile(row, principal.email)

    @staticmethod
    def _map_to_profile(row: dict, email: str) -> UserProfile:
        return UserProfile(
            id=str(row["id"]),
            email=email,
            username=row.get("username"),
            name=row.get("name"),
            role=Role(row.get("role") or Role.USER.value),
            profile_pic=row.get("profile_pic"),
            introduction=row.get("introduction"),
        )
