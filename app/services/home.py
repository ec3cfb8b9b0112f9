"""
Home service for managing listings with business logic validation.
Handles filtering, CRUD operations, ownership checks and transaction boundaries.
"""

from typing import Optional, List, Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.home import HomeRepository
from app.repositories.image import ImageRepository
from app.repositories.user import UserRepository
from app.models.home import Home
from app.models.user import User
from app.schemas.home import (
    HomeCreate,
    HomeUpdate,
    HomeResponse,
    HomeDetailResponse,
    RealtorResponse
)
from app.utils.filters import build_home_filters
from app.utils.exceptions import (
    NotFoundError,
    HomeNotFoundError,
    ValidationError,
    BadRequestError,
    InsufficientPermissionsError
)
import logging

logger = logging.getLogger(__name__)


class HomeService:
    """
    Home service for listing, creating, updating and deleting homes.
    Multi-step writes run in a single transaction on the request session.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.home_repo = HomeRepository(db_session)
        self.image_repo = ImageRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def get_homes(
        self,
        city: Optional[str] = None,
        min_price: Any = None,
        max_price: Any = None,
        property_type: Any = None
    ) -> List[HomeResponse]:
        """
        List homes matching the given filters.

        Args:
            city: Exact city match
            min_price: Inclusive lower price bound
            max_price: Inclusive upper price bound
            property_type: RESIDENTIAL or CONDO, case-insensitive

        Returns:
            Home summaries, each with at most one image URL

        Raises:
            ValidationError: If any filter value is invalid
        """
        filters = build_home_filters(city, min_price, max_price, property_type)

        try:
            rows = await self.home_repo.list_homes(filters)
        except Exception as e:
            logger.error(f"Failed to list homes with filters {filters}: {e}")
            raise BadRequestError("Failed to list homes")

        logger.debug(f"Listed {len(rows)} homes")
        return [HomeResponse.model_validate(home.to_dict(image=image)) for home, image in rows]

    async def get_home(self, home_id: int) -> HomeDetailResponse:
        """
        Get a home with its realtor.

        Raises:
            HomeNotFoundError: If the home doesn't exist
        """
        home = await self.home_repo.get_home_with_details(home_id)
        if not home:
            raise HomeNotFoundError(home_id)

        logger.debug(f"Retrieved home: {home_id}")
        return HomeDetailResponse.model_validate({
            **home.to_dict(image=self._first_image_url(home)),
            "realtor": home.realtor.to_realtor_dict()
        })

    async def create_home(self, home_data: HomeCreate, current_user: User) -> HomeResponse:
        """
        Create a home and its images in one transaction.

        Args:
            home_data: Home creation data including image URLs
            current_user: Realtor or admin listing the home

        Returns:
            Created home summary

        Raises:
            InsufficientPermissionsError: If the user is not a realtor or admin
            BadRequestError: If the database write fails
        """
        if not (current_user.is_realtor or current_user.is_admin):
            raise InsufficientPermissionsError("create homes")

        create_data = home_data.model_dump(exclude={"images"})
        create_data["realtor_id"] = current_user.id
        urls = [image.url for image in home_data.images]

        try:
            home = await self.home_repo.create(create_data, commit=False)
            await self.image_repo.create_for_home(home.id, urls, commit=False)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create home for user {current_user.id}: {e}")
            raise BadRequestError("Failed to create home")

        logger.info(f"Home created by user {current_user.email}: {home.address} (ID: {home.id}, images: {len(urls)})")
        return await self._load_response(home.id)

    async def update_home(self, home_id: int, home_data: HomeUpdate, current_user: User) -> HomeResponse:
        """
        Apply a partial update to a home.

        Args:
            home_id: ID of the home to update
            home_data: Fields to change
            current_user: Owner of the home or an admin

        Returns:
            Updated home summary

        Raises:
            HomeNotFoundError: If the home doesn't exist
            InsufficientPermissionsError: If the user doesn't own the home
            ValidationError: If no fields were provided
        """
        existing_home = await self.home_repo.get_by_id(home_id)
        if not existing_home:
            raise HomeNotFoundError(home_id)

        if not current_user.can_manage_home(existing_home.realtor_id):
            raise InsufficientPermissionsError("update this home")

        update_data = home_data.model_dump(exclude_none=True)
        if not update_data:
            raise ValidationError("No valid fields provided for update")

        try:
            updated_home = await self.home_repo.update(home_id, update_data)
        except Exception as e:
            logger.error(f"Failed to update home {home_id}: {e}")
            raise BadRequestError("Failed to update home")

        if not updated_home:
            raise HomeNotFoundError(home_id)

        logger.info(f"Home updated by user {current_user.email}: {home_id} ({', '.join(update_data)})")
        return await self._load_response(home_id)

    async def delete_home(self, home_id: int, current_user: User) -> None:
        """
        Delete a home and all of its images atomically.

        Images are removed first, then the home; both deletes are committed
        together or rolled back together.

        Raises:
            HomeNotFoundError: If the home doesn't exist
            InsufficientPermissionsError: If the user doesn't own the home
            BadRequestError: If either delete fails
        """
        existing_home = await self.home_repo.get_by_id(home_id)
        if not existing_home:
            raise HomeNotFoundError(home_id)

        if not current_user.can_manage_home(existing_home.realtor_id):
            raise InsufficientPermissionsError("delete this home")

        try:
            deleted_images = await self.image_repo.delete_by_home_id(home_id, commit=False)
            await self.home_repo.delete(home_id, commit=False)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete home {home_id}, transaction rolled back: {e}")
            raise BadRequestError("Failed to delete home")

        logger.info(f"Home deleted by user {current_user.email}: {home_id} (images: {deleted_images})")

    async def get_realtor_by_home_id(self, home_id: int) -> RealtorResponse:
        """
        Get contact details of the realtor who listed a home.

        Raises:
            NotFoundError: If the home doesn't exist
        """
        realtor = await self.user_repo.get_realtor_by_home_id(home_id)
        if not realtor:
            raise HomeNotFoundError(home_id)

        return RealtorResponse.model_validate(realtor.to_realtor_dict())

    async def _load_response(self, home_id: int) -> HomeResponse:
        # Re-read so server-side defaults and images are populated
        home = await self.home_repo.get_home_with_details(home_id)
        if not home:
            raise NotFoundError("Home", home_id)
        return HomeResponse.model_validate(home.to_dict(image=self._first_image_url(home)))

    @staticmethod
    def _first_image_url(home: Home) -> Optional[str]:
        return home.images[0].url if home.images else None
