"""
Authentication endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service, get_client_factory
from api.middleware.auth import get_current_context, get_user_data_client
from shared.database import DataClientFactory
from shared.interfaces import IDataClient
from shared.models import AuthContext

from .interfaces import IAuthService
from .models import LoginRequest, ProfileUpdateRequest, RegisterRequest, TokenResponse, UserProfile

router = APIRouter()


@router.post("/register", response_model=UserProfile, status_code=201)
async def register(
    request: RegisterRequest,
    auth: IAuthService = Depends(get_auth_service),
    clients: DataClientFactory = Depends(get_client_factory),
) -> UserProfile:
    """
    Create an account and its profile.

    The username check and the profile insert run on an admin client: the
    new user has no session yet and usernames are unique across everyone.
    """
    db = await clients.admin("profile provisioning")
    return await auth.register(request, db)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> TokenResponse:
    return await auth.login(request)


@router.get("/me", response_model=UserProfile)
async def get_me(
    context: AuthContext = Depends(get_current_context),
    db: IDataClient = Depends(get_user_data_client),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfile:
    """
    The caller's profile, including the stored role.
    """
    return await auth.get_profile(context.principal, db)


@router.put("/me", response_model=UserProfile)
async def update_me(
    request: ProfileUpdateRequest,
    context: AuthContext = Depends(get_current_context),
    db: IDataClient = Depends(get_user_data_client),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfile:
    """
    Change the caller's display name or introduction.
    """
    return await auth.update_profile(context.principal, request, db)
