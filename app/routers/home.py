"""
Home listing API endpoints for CRUD operations and filtering.
Reads are public; writes require a realtor (create) or the listing's owner.
"""

from fastapi import APIRouter, Depends, Query, Path, Response, status
from typing import Optional, List

from app.models.user import User
from app.services.home import HomeService
from app.services.error_handler import ERROR_RESPONSES
from app.schemas.home import (
    HomeCreate,
    HomeUpdate,
    HomeResponse,
    HomeDetailResponse,
    RealtorResponse
)
from app.utils.dependencies import (
    get_current_user,
    get_current_realtor_user,
    get_home_service
)


# Upper bound of the int4 primary key
MAX_HOME_ID = 2_147_483_647

router = APIRouter(prefix="/home", tags=["Homes"])


@router.get(
    "",
    response_model=List[HomeResponse],
    status_code=status.HTTP_200_OK,
    summary="List homes",
    description="List homes, optionally filtered by city, inclusive price range and property type",
    responses={422: ERROR_RESPONSES[422]}
)
async def get_homes(
    city: Optional[str] = Query(None, description="Exact city match"),
    min_price: Optional[str] = Query(None, alias="minPrice", description="Minimum price (inclusive)"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Maximum price (inclusive)"),
    property_type: Optional[str] = Query(None, alias="propertyType", description="RESIDENTIAL or CONDO"),
    home_service: HomeService = Depends(get_home_service)
) -> List[HomeResponse]:
    # Prices stay strings here so the filter builder can report every bad value at once
    return await home_service.get_homes(
        city=city,
        min_price=min_price,
        max_price=max_price,
        property_type=property_type
    )


@router.get(
    "/{home_id}",
    response_model=HomeDetailResponse,
    summary="Get home",
    description="Get a single home with its realtor's contact details",
    responses={404: ERROR_RESPONSES[404]}
)
async def get_home(
    home_id: int = Path(..., ge=1, le=MAX_HOME_ID, description="Home ID"),
    home_service: HomeService = Depends(get_home_service)
) -> HomeDetailResponse:
    return await home_service.get_home(home_id)


@router.get(
    "/{home_id}/realtor",
    response_model=RealtorResponse,
    summary="Get home realtor",
    responses={404: ERROR_RESPONSES[404]}
)
async def get_home_realtor(
    home_id: int = Path(..., ge=1, le=MAX_HOME_ID, description="Home ID"),
    home_service: HomeService = Depends(get_home_service)
) -> RealtorResponse:
    return await home_service.get_realtor_by_home_id(home_id)


@router.post(
    "",
    response_model=HomeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create home",
    description="Create a home and its images. Requires realtor or admin user type.",
    responses={401: ERROR_RESPONSES[401], 403: ERROR_RESPONSES[403], 422: ERROR_RESPONSES[422]}
)
async def create_home(
    home_data: HomeCreate,
    current_user: User = Depends(get_current_realtor_user),
    home_service: HomeService = Depends(get_home_service)
) -> HomeResponse:
    """
    Create a new home listing owned by the current user.

    Every URL in ``images`` becomes one image row of the new home.
    """
    return await home_service.create_home(home_data, current_user)


@router.put(
    "/{home_id}",
    response_model=HomeResponse,
    summary="Update home",
    description="Partially update a home. Only the listing's realtor or an admin may update it.",
    responses={
        401: ERROR_RESPONSES[401],
        403: ERROR_RESPONSES[403],
        404: ERROR_RESPONSES[404],
        422: ERROR_RESPONSES[422]
    }
)
async def update_home(
    home_data: HomeUpdate,
    home_id: int = Path(..., ge=1, le=MAX_HOME_ID, description="Home ID"),
    current_user: User = Depends(get_current_user),
    home_service: HomeService = Depends(get_home_service)
) -> HomeResponse:
    return await home_service.update_home(home_id, home_data, current_user)


@router.delete(
    "/{home_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete home",
    description="Delete a home and all of its images",
    responses={401: ERROR_RESPONSES[401], 403: ERROR_RESPONSES[403], 404: ERROR_RESPONSES[404]}
)
async def delete_home(
    home_id: int = Path(..., ge=1, le=MAX_HOME_ID, description="Home ID"),
    current_user: User = Depends(get_current_user),
    home_service: HomeService = Depends(get_home_service)
) -> Response:
    await home_service.delete_home(home_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
