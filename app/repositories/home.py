"""
Home repository for listing queries with filtering.
Turns filter dicts from ``app.utils.filters`` into SQLAlchemy conditions.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from sqlalchemy.orm import selectinload
from app.repositories.base import BaseRepository
from app.models.home import Home
from app.models.image import Image
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class HomeRepository(BaseRepository[Home]):
    """
    Repository for home listings.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Home, db)

    async def list_homes(self, filters: Dict[str, Any]) -> List[Tuple[Home, Optional[str]]]:
        """
        List homes matching ``filters`` with at most one image URL each.

        Args:
            filters: Filter dict with optional ``city``, ``price`` ({gte, lte})
                and ``property_type`` keys

        Returns:
            List of (home, first image URL or None) pairs ordered by home ID
        """
        try:
            # Correlated subquery: the lowest-id image of each home
            first_image = (
                select(Image.url)
                .where(Image.home_id == Home.id)
                .order_by(Image.id.asc())
                .limit(1)
                .correlate(Home)
                .scalar_subquery()
            )

            query = select(Home, first_image.label("image"))

            conditions = self._build_filter_conditions(filters)
            if conditions:
                query = query.where(and_(*conditions))

            query = query.order_by(Home.id.asc())

            result = await self.db.execute(query)
            rows = [(row[0], row[1]) for row in result.all()]

            logger.debug(f"Home list returned {len(rows)} results for filters {filters}")
            return rows
        except Exception as e:
            logger.error(f"Failed to list homes: {e}")
            raise

    async def get_home_with_details(self, home_id: int) -> Optional[Home]:
        """
        Get a home with its realtor and images loaded.

        Args:
            home_id: ID of the home

        Returns:
            Home with loaded relationships or None if not found
        """
        try:
            query = (
                select(Home)
                .options(
                    selectinload(Home.realtor),
                    selectinload(Home.images)
                )
                .where(Home.id == home_id)
                .execution_options(populate_existing=True)
            )

            result = await self.db.execute(query)
            home = result.scalar_one_or_none()

            if home:
                logger.debug(f"Retrieved home with details: {home_id}")

            return home
        except Exception as e:
            logger.error(f"Failed to get home with details {home_id}: {e}")
            raise

    def _build_filter_conditions(self, filters: Dict[str, Any]) -> List:
        """
        Build SQLAlchemy filter conditions from a filter dict.

        Args:
            filters: Filter dict built by ``build_home_filters``

        Returns:
            List of SQLAlchemy conditions
        """
        conditions = []

        # Exact city match
        if filters.get("city"):
            conditions.append(Home.city == filters["city"])

        # Inclusive price range, bounds are independent
        price = filters.get("price") or {}
        if price.get("gte") is not None:
            conditions.append(Home.price >= price["gte"])
        if price.get("lte") is not None:
            conditions.append(Home.price <= price["lte"])

        if filters.get("property_type") is not None:
            conditions.append(Home.property_type == filters["property_type"])

        return conditions
