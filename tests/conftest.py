"""
Test configuration and fixtures for the realtor home API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Must be set before the app (and its settings/engine) is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import uuid
from typing import AsyncGenerator, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.database import Base, get_db
from app.models.user import User, UserType
from app.models.home import Home, PropertyType
from app.repositories.user import UserRepository
from app.repositories.home import HomeRepository
from app.repositories.image import ImageRepository
from app.services.auth import AuthService
from app.services.home import HomeService
from app.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite://"

DEFAULT_PASSWORD = "password123"


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def home_repository(db_session: AsyncSession) -> HomeRepository:
    return HomeRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    return ImageRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def home_service(db_session: AsyncSession) -> HomeService:
    return HomeService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "Test User",
        phone: str = "555-0000",
        user_type: UserType = UserType.REALTOR
    ) -> dict:
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "name": name,
            "phone": phone,
            "user_type": user_type
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "Test User",
        phone: str = "555-0000",
        user_type: UserType = UserType.REALTOR
    ) -> User:
        """Create a test user in the database."""
        user_data = UserFactory.create_user_data(
            email=email,
            password=password,
            name=name,
            phone=phone,
            user_type=user_type
        )
        return await user_repo.create_user(user_data)


class HomeFactory:
    """Factory for creating test homes with images."""

    @staticmethod
    def create_home_data(
        realtor_id: int,
        address: str = "1 Test Street",
        city: str = "Toronto",
        price: float = 500000,
        land_size: float = 3000,
        number_of_bedrooms: int = 3,
        number_of_bathrooms: float = 2,
        property_type: PropertyType = PropertyType.RESIDENTIAL
    ) -> dict:
        return {
            "address": address,
            "city": city,
            "price": price,
            "land_size": land_size,
            "number_of_bedrooms": number_of_bedrooms,
            "number_of_bathrooms": number_of_bathrooms,
            "property_type": property_type,
            "realtor_id": realtor_id
        }

    @staticmethod
    async def create_home(
        db_session: AsyncSession,
        realtor_id: int,
        images: Optional[List[str]] = None,
        **overrides
    ) -> Home:
        """Create a home and its images in the database."""
        home_repo = HomeRepository(db_session)
        image_repo = ImageRepository(db_session)

        home = await home_repo.create(
            HomeFactory.create_home_data(realtor_id, **overrides),
            commit=False
        )
        await image_repo.create_for_home(home.id, images or [], commit=False)
        await db_session.commit()
        return home


def auth_headers(user: User) -> Dict[str, str]:
    """Bearer authorization header for ``user``."""
    token = create_access_token(user_id=user.id, email=user.email, user_type=user.user_type)
    return {"Authorization": f"Bearer {token}"}


def home_payload(**overrides) -> dict:
    """Wire-format (camelCase) body for creating a home."""
    payload = {
        "address": "10 Queen Street",
        "numberOfBedrooms": 2,
        "numberOfBathrooms": 1.5,
        "city": "Toronto",
        "price": 450000,
        "landSize": 1200,
        "propertyType": "CONDO",
        "images": [
            {"url": "https://images.example.com/queen/1.jpg"},
            {"url": "https://images.example.com/queen/2.jpg"}
        ]
    }
    payload.update(overrides)
    return payload


# Common test fixtures
@pytest.fixture
async def test_realtor(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="realtor@test.com",
        name="Rita Realtor",
        phone="555-0101",
        user_type=UserType.REALTOR
    )


@pytest.fixture
async def other_realtor(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="other@test.com",
        name="Otto Other",
        user_type=UserType.REALTOR
    )


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@test.com",
        name="Test Admin",
        user_type=UserType.ADMIN
    )


@pytest.fixture
async def test_buyer(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="buyer@test.com",
        name="Bob Buyer",
        user_type=UserType.BUYER
    )


@pytest.fixture
async def test_home(db_session: AsyncSession, test_realtor: User) -> Home:
    """A Toronto residential home with two images."""
    return await HomeFactory.create_home(
        db_session,
        realtor_id=test_realtor.id,
        images=[
            "https://images.example.com/test/first.jpg",
            "https://images.example.com/test/second.jpg"
        ]
    )
