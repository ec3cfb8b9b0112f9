"""
Image repository for listing image records.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from app.repositories.base import BaseRepository
from app.models.image import Image
from typing import List
import logging

logger = logging.getLogger(__name__)


class ImageRepository(BaseRepository[Image]):
    """Repository for images attached to homes."""

    def __init__(self, db: AsyncSession):
        super().__init__(Image, db)

    async def create_for_home(self, home_id: int, urls: List[str], commit: bool = True) -> List[Image]:
        """
        Create one image row per URL, all pointing at ``home_id``.

        Args:
            home_id: ID of the owning home
            urls: Image URLs in display order
            commit: Commit immediately, or only flush

        Returns:
            Created images
        """
        if not urls:
            return []

        images = await self.bulk_create(
            [{"url": url, "home_id": home_id} for url in urls],
            commit=commit
        )
        logger.debug(f"Added {len(images)} images to home {home_id}")
        return images

    async def get_home_images(self, home_id: int) -> List[Image]:
        """Get all images of a home ordered by ID."""
        try:
            query = select(Image).where(Image.home_id == home_id).order_by(Image.id.asc())
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get images for home {home_id}: {e}")
            raise

    async def delete_by_home_id(self, home_id: int, commit: bool = True) -> int:
        """
        Delete every image of a home.

        Args:
            home_id: ID of the home whose images are removed
            commit: Commit immediately, or leave the transaction open

        Returns:
            Number of images deleted
        """
        try:
            stmt = delete(Image).where(Image.home_id == home_id)
            result = await self.db.execute(stmt)
            if commit:
                await self.db.commit()

            logger.debug(f"Deleted {result.rowcount} images for home {home_id}")
            return result.rowcount
        except Exception as e:
            if commit:
                await self.db.rollback()
            logger.error(f"Failed to delete images for home {home_id}: {e}")
            raise
