"""
Tests for service classes.
Covers call ordering and transaction handling with mocked repositories, and
end-to-end behaviour against the test database.
"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, Mock
from sqlalchemy.exc import SQLAlchemyError

from app.models.user import User, UserType
from app.models.home import Home, PropertyType
from app.models.image import Image
from app.services.home import HomeService
from app.services.auth import AuthService
from app.repositories.user import DuplicateEmailError
from app.schemas.home import HomeCreate, HomeUpdate
from app.schemas.auth import SignupRequest
from app.utils.auth import generate_product_key
from app.utils.exceptions import (
    HomeNotFoundError,
    ValidationError,
    BadRequestError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidProductKeyError,
    DuplicateResourceError
)
from tests.conftest import HomeFactory, DEFAULT_PASSWORD


def make_user(user_id: int = 1, user_type: UserType = UserType.REALTOR) -> User:
    return User(
        id=user_id,
        name=f"User {user_id}",
        phone="555-0000",
        email=f"user{user_id}@example.com",
        password="hash",
        user_type=user_type
    )


def make_home(home_id: int = 7, realtor_id: int = 1, image_urls=()) -> Home:
    home = Home(
        id=home_id,
        address="1 Test Street",
        number_of_bedrooms=3,
        number_of_bathrooms=2,
        city="Toronto",
        listed_date=datetime(2024, 1, 1),
        price=500000,
        land_size=3000,
        property_type=PropertyType.RESIDENTIAL,
        realtor_id=realtor_id
    )
    home.images = [Image(id=i + 1, url=url, home_id=home_id) for i, url in enumerate(image_urls)]
    return home


def make_mocked_service():
    db = AsyncMock()
    service = HomeService(db)
    service.home_repo = AsyncMock()
    service.image_repo = AsyncMock()
    service.user_repo = AsyncMock()
    return service, db


class TestHomeServiceCallOrder:
    """Repository interaction of HomeService, with the database mocked out."""

    async def test_get_homes_shapes_single_image(self):
        service, _ = make_mocked_service()
        service.home_repo.list_homes.return_value = [
            (make_home(1), "https://img.example.com/1.jpg"),
            (make_home(2), None)
        ]

        homes = await service.get_homes(city="Toronto")

        service.home_repo.list_homes.assert_awaited_once_with({"city": "Toronto"})
        first = homes[0].model_dump(by_alias=True)
        assert first["image"] == "https://img.example.com/1.jpg"
        assert "images" not in first
        assert homes[1].image is None

    async def test_get_homes_invalid_filter_skips_query(self):
        service, _ = make_mocked_service()

        with pytest.raises(ValidationError):
            await service.get_homes(min_price="not-a-number")

        service.home_repo.list_homes.assert_not_called()

    async def test_update_missing_home_issues_no_update(self):
        service, db = make_mocked_service()
        service.home_repo.get_by_id.return_value = None

        with pytest.raises(HomeNotFoundError):
            await service.update_home(99, HomeUpdate(price=1), make_user())

        service.home_repo.update.assert_not_called()
        db.commit.assert_not_called()

    async def test_update_by_non_owner_is_forbidden(self):
        service, _ = make_mocked_service()
        service.home_repo.get_by_id.return_value = make_home(realtor_id=1)

        with pytest.raises(InsufficientPermissionsError):
            await service.update_home(7, HomeUpdate(price=1), make_user(user_id=2))

        service.home_repo.update.assert_not_called()

    async def test_update_by_admin_is_allowed(self):
        service, _ = make_mocked_service()
        service.home_repo.get_by_id.return_value = make_home(realtor_id=1)
        service.home_repo.update.return_value = make_home(realtor_id=1)
        service.home_repo.get_home_with_details.return_value = make_home(realtor_id=1)

        await service.update_home(7, HomeUpdate(city="Ottawa"), make_user(user_id=3, user_type=UserType.ADMIN))

        service.home_repo.update.assert_awaited_once_with(7, {"city": "Ottawa"})

    async def test_delete_removes_images_then_home_in_one_commit(self):
        service, db = make_mocked_service()
        service.home_repo.get_by_id.return_value = make_home(home_id=5, realtor_id=1)

        calls = []
        service.image_repo.delete_by_home_id.side_effect = (
            lambda home_id, commit=True: calls.append(("images", home_id, commit)) or 2
        )
        service.home_repo.delete.side_effect = (
            lambda home_id, commit=True: calls.append(("home", home_id, commit)) or True
        )

        await service.delete_home(5, make_user(user_id=1))

        assert calls == [("images", 5, False), ("home", 5, False)]
        db.commit.assert_awaited_once()
        db.rollback.assert_not_called()

    async def test_delete_rolls_back_when_home_delete_fails(self):
        service, db = make_mocked_service()
        service.home_repo.get_by_id.return_value = make_home(home_id=5, realtor_id=1)
        service.home_repo.delete.side_effect = SQLAlchemyError("DELETE FROM homes WHERE homes.id = $1")

        with pytest.raises(BadRequestError) as exc_info:
            await service.delete_home(5, make_user(user_id=1))

        assert exc_info.value.detail == "Failed to delete home"

        service.image_repo.delete_by_home_id.assert_awaited_once_with(5, commit=False)
        db.rollback.assert_awaited_once()
        db.commit.assert_not_called()

    async def test_delete_missing_home(self):
        service, _ = make_mocked_service()
        service.home_repo.get_by_id.return_value = None

        with pytest.raises(HomeNotFoundError):
            await service.delete_home(5, make_user())

        service.image_repo.delete_by_home_id.assert_not_called()
        service.home_repo.delete.assert_not_called()

    async def test_create_links_every_image_to_new_home(self):
        service, db = make_mocked_service()
        service.home_repo.create.return_value = Mock(id=42, address="1 Test Street")
        service.home_repo.get_home_with_details.return_value = make_home(
            home_id=42, image_urls=["https://img.example.com/a.jpg", "https://img.example.com/b.jpg"]
        )
        home_data = HomeCreate(
            address="1 Test Street",
            number_of_bedrooms=3,
            number_of_bathrooms=2,
            city="Toronto",
            price=500000,
            land_size=3000,
            images=[{"url": "https://img.example.com/a.jpg"}, {"url": "https://img.example.com/b.jpg"}]
        )

        result = await service.create_home(home_data, make_user(user_id=1))

        create_data = service.home_repo.create.await_args.args[0]
        assert create_data["realtor_id"] == 1
        assert "images" not in create_data
        service.image_repo.create_for_home.assert_awaited_once_with(
            42,
            ["https://img.example.com/a.jpg", "https://img.example.com/b.jpg"],
            commit=False
        )
        db.commit.assert_awaited_once()
        assert result.image == "https://img.example.com/a.jpg"

    async def test_create_by_buyer_is_forbidden(self):
        service, _ = make_mocked_service()
        home_data = HomeCreate(
            address="1 Test Street",
            number_of_bedrooms=3,
            number_of_bathrooms=2,
            city="Toronto",
            price=500000,
            land_size=3000
        )

        with pytest.raises(InsufficientPermissionsError):
            await service.create_home(home_data, make_user(user_type=UserType.BUYER))

        service.home_repo.create.assert_not_called()


class TestHomeServiceDatabase:
    """HomeService against the test database."""

    async def test_create_home_persists_images(self, home_service, image_repository, test_realtor):
        home_data = HomeCreate(
            address="5 Bay Street",
            number_of_bedrooms=2,
            number_of_bathrooms=1,
            city="Toronto",
            price=400000,
            land_size=900,
            property_type=PropertyType.CONDO,
            images=[{"url": "https://img.example.com/1.jpg"}, {"url": "https://img.example.com/2.jpg"}]
        )

        created = await home_service.create_home(home_data, test_realtor)

        images = await image_repository.get_home_images(created.id)
        assert [image.url for image in images] == [
            "https://img.example.com/1.jpg",
            "https://img.example.com/2.jpg"
        ]
        assert all(image.home_id == created.id for image in images)
        assert created.realtor_id == test_realtor.id
        assert created.image == "https://img.example.com/1.jpg"
        assert created.listed_date is not None

    async def test_create_home_without_images(self, home_service, test_realtor):
        home_data = HomeCreate(
            address="5 Bay Street",
            number_of_bedrooms=2,
            number_of_bathrooms=1,
            city="Toronto",
            price=400000,
            land_size=900
        )

        created = await home_service.create_home(home_data, test_realtor)

        assert created.image is None
        assert created.property_type == PropertyType.RESIDENTIAL

    async def test_get_home_includes_realtor(self, home_service, test_home, test_realtor):
        home = await home_service.get_home(test_home.id)

        assert home.id == test_home.id
        assert home.image == "https://images.example.com/test/first.jpg"
        assert home.realtor.id == test_realtor.id
        assert home.realtor.email == test_realtor.email

    async def test_get_missing_home(self, home_service):
        with pytest.raises(HomeNotFoundError):
            await home_service.get_home(12345)

    async def test_update_home_applies_only_given_fields(self, home_service, test_home, test_realtor):
        updated = await home_service.update_home(test_home.id, HomeUpdate(price=123456), test_realtor)

        assert updated.price == 123456
        assert updated.city == "Toronto"
        assert updated.address == "1 Test Street"

    async def test_delete_home_removes_images(self, home_service, home_repository, image_repository, test_home, test_realtor):
        await home_service.delete_home(test_home.id, test_realtor)

        assert await home_repository.get_by_id(test_home.id) is None
        assert await image_repository.get_home_images(test_home.id) == []

    async def test_delete_by_other_realtor_keeps_home(self, home_service, home_repository, test_home, other_realtor):
        with pytest.raises(InsufficientPermissionsError):
            await home_service.delete_home(test_home.id, other_realtor)

        assert await home_repository.exists(test_home.id)

    async def test_get_realtor_by_home_id(self, home_service, test_home, test_realtor):
        realtor = await home_service.get_realtor_by_home_id(test_home.id)

        assert realtor.model_dump() == {
            "id": test_realtor.id,
            "name": "Rita Realtor",
            "email": "realtor@test.com",
            "phone": "555-0101"
        }

    async def test_get_realtor_for_missing_home(self, home_service):
        with pytest.raises(HomeNotFoundError):
            await home_service.get_realtor_by_home_id(999)

    async def test_list_filters_by_type(self, home_service, db_session, test_realtor):
        await HomeFactory.create_home(db_session, test_realtor.id, property_type=PropertyType.CONDO)
        await HomeFactory.create_home(db_session, test_realtor.id, property_type=PropertyType.RESIDENTIAL)

        homes = await home_service.get_homes(property_type="condo")

        assert [home.property_type for home in homes] == [PropertyType.CONDO]


class TestAuthService:
    """Test AuthService functionality."""

    async def test_signup_buyer(self, auth_service: AuthService, user_repository):
        signup = SignupRequest(name="Bea", phone="555", email="bea@example.com", password="secret")

        token = await auth_service.signup(signup, UserType.BUYER)

        assert token.access_token
        assert token.token_type == "bearer"
        user = await user_repository.get_by_email("bea@example.com")
        assert user.user_type == UserType.BUYER
        assert user.password != "secret"

    async def test_signup_realtor_requires_product_key(self, auth_service: AuthService):
        signup = SignupRequest(name="Rae", phone="555", email="rae@example.com", password="secret")

        with pytest.raises(InvalidProductKeyError):
            await auth_service.signup(signup, UserType.REALTOR)

    async def test_signup_realtor_with_valid_product_key(self, auth_service: AuthService, user_repository):
        key = generate_product_key("rae@example.com", UserType.REALTOR)
        signup = SignupRequest(
            name="Rae", phone="555", email="rae@example.com", password="secret", product_key=key
        )

        await auth_service.signup(signup, UserType.REALTOR)

        user = await user_repository.get_by_email("rae@example.com")
        assert user.user_type == UserType.REALTOR

    async def test_product_key_is_bound_to_user_type(self, auth_service: AuthService):
        key = generate_product_key("rae@example.com", UserType.REALTOR)
        signup = SignupRequest(
            name="Rae", phone="555", email="rae@example.com", password="secret", product_key=key
        )

        with pytest.raises(InvalidProductKeyError):
            await auth_service.signup(signup, UserType.ADMIN)

    async def test_signup_duplicate_email(self, auth_service: AuthService, test_buyer):
        signup = SignupRequest(name="Bob", phone="555", email=test_buyer.email, password="secret")

        with pytest.raises(DuplicateResourceError):
            await auth_service.signup(signup, UserType.BUYER)

    async def test_signup_losing_email_race_is_conflict(self, auth_service: AuthService):
        auth_service.user_repo = AsyncMock()
        auth_service.user_repo.check_email_availability.return_value = True
        auth_service.user_repo.create_user.side_effect = DuplicateEmailError("bea@example.com")
        signup = SignupRequest(name="Bea", phone="555", email="bea@example.com", password="secret")

        with pytest.raises(DuplicateResourceError):
            await auth_service.signup(signup, UserType.BUYER)

    async def test_signup_database_failure_hides_driver_text(self, auth_service: AuthService):
        auth_service.user_repo = AsyncMock()
        auth_service.user_repo.check_email_availability.return_value = True
        auth_service.user_repo.create_user.side_effect = SQLAlchemyError("INSERT INTO users ... connection reset")
        signup = SignupRequest(name="Bea", phone="555", email="bea@example.com", password="secret")

        with pytest.raises(BadRequestError) as exc_info:
            await auth_service.signup(signup, UserType.BUYER)

        assert exc_info.value.detail == "Failed to create user"

    async def test_signin_success(self, auth_service: AuthService, test_realtor):
        token = await auth_service.signin(test_realtor.email, DEFAULT_PASSWORD)

        user = await auth_service.get_current_user(token.access_token)
        assert user.id == test_realtor.id

    async def test_signin_wrong_password(self, auth_service: AuthService, test_realtor):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.signin(test_realtor.email, "wrong-password")

    async def test_signin_unknown_email(self, auth_service: AuthService):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.signin("nobody@example.com", DEFAULT_PASSWORD)

    async def test_generate_product_key_requires_admin(self, auth_service: AuthService, test_realtor):
        with pytest.raises(InsufficientPermissionsError):
            auth_service.generate_product_key("x@example.com", UserType.REALTOR, test_realtor)
