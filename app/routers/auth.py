"""
Authentication API endpoints for signup, signin, product keys and user information.
Provides JWT-based authentication with user type based access control.
"""

from fastapi import APIRouter, Depends, Path, status
from app.models.user import User, UserType
from app.services.auth import AuthService
from app.services.error_handler import ERROR_RESPONSES
from app.schemas.auth import (
    SignupRequest,
    SigninRequest,
    GenerateProductKeyRequest,
    TokenResponse,
    ProductKeyResponse,
    UserResponse
)
from app.utils.dependencies import (
    get_auth_service,
    get_current_user,
    get_current_admin_user
)


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/signup/{user_type}",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="User signup",
    description="Register a buyer, or a realtor/admin holding a product key",
    responses={401: ERROR_RESPONSES[401], 422: ERROR_RESPONSES[422]}
)
async def signup(
    signup_data: SignupRequest,
    user_type: UserType = Path(..., description="BUYER, REALTOR or ADMIN"),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    """
    Register a new user and return an access token.

    Raises:
        InvalidProductKeyError: If a non-buyer signup has no valid product key
        DuplicateResourceError: If the email is already registered
    """
    return await auth_service.signup(signup_data, user_type)


@router.post(
    "/signin",
    response_model=TokenResponse,
    summary="User signin",
    description="Authenticate with email and password, returns a JWT access token",
    responses={401: ERROR_RESPONSES[401], 422: ERROR_RESPONSES[422]}
)
async def signin(
    signin_data: SigninRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    return await auth_service.signin(signin_data.email, signin_data.password)


@router.post(
    "/key",
    response_model=ProductKeyResponse,
    summary="Generate product key",
    description="Issue a product key for a realtor or admin signup. Admin only.",
    responses={401: ERROR_RESPONSES[401], 403: ERROR_RESPONSES[403]}
)
async def generate_product_key(
    key_request: GenerateProductKeyRequest,
    current_user: User = Depends(get_current_admin_user),
    auth_service: AuthService = Depends(get_auth_service)
) -> ProductKeyResponse:
    product_key = auth_service.generate_product_key(
        key_request.email,
        key_request.user_type,
        current_user
    )
    return ProductKeyResponse(product_key=product_key)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
    responses={401: ERROR_RESPONSES[401]}
)
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)
