"""Test configuration and fixtures"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from qrmenu.main import app
from qrmenu.database import Base, get_db
from qrmenu.models.client import Client
from qrmenu.models.menu import Menu, Category, MenuItem
from qrmenu.models.user import User, UserRole
from qrmenu.api.auth import get_password_hash, create_access_token
from qrmenu.api.deps import get_qr_code_service
from qrmenu.services.qr_codes import QRCodeService


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_restaurant(test_db):
    """Create a test client (restaurant)"""
    restaurant = Client(
        name="Test Restaurant",
        slug="test-restaurant",
        address="123 Test St",
        social_media={},
        active=True,
    )
    test_db.add(restaurant)
    await test_db.commit()

    return restaurant


@pytest.fixture
async def test_menu(test_db, test_restaurant):
    """Create the test restaurant's menu, unpublished"""
    menu = Menu(client_id=test_restaurant.id, name="Main", active=True, published=False)
    test_db.add(menu)
    await test_db.commit()

    return menu


@pytest.fixture
async def test_category(test_db, test_menu):
    """Create a category at position 1"""
    category = Category(menu_id=test_menu.id, name="Pizza", order=1, active=True)
    test_db.add(category)
    await test_db.commit()

    return category


@pytest.fixture
async def test_menu_items(test_db, test_menu, test_category):
    """Create test menu items"""
    items = [
        MenuItem(
            category_id=test_category.id,
            menu_id=test_menu.id,
            name="Margherita Pizza",
            description="Classic tomato and mozzarella",
            price_bgn=12.00,
            price_eur=6.14,
            tags=["vegetarian"],
            allergens=["gluten", "dairy"],
            addons=[],
            order=1,
            available=True,
        ),
        MenuItem(
            category_id=test_category.id,
            menu_id=test_menu.id,
            name="Pepperoni Pizza",
            description="Pepperoni with mozzarella",
            price_bgn=14.00,
            price_eur=7.16,
            tags=["spicy"],
            allergens=["gluten", "dairy"],
            addons=[],
            order=2,
            available=True,
        ),
    ]

    for item in items:
        test_db.add(item)

    await test_db.commit()
    return items


@pytest.fixture
async def published_menu(test_db, test_menu, test_menu_items):
    """The test menu with its items, published"""
    test_menu.published = True
    await test_db.commit()
    return test_menu


@pytest.fixture
async def other_restaurant(test_db):
    """A second client with its own menu and category"""
    restaurant = Client(name="Other Restaurant", slug="other-restaurant", social_media={}, active=True)
    test_db.add(restaurant)
    await test_db.flush()

    menu = Menu(client_id=restaurant.id, name="Other Menu", active=True, published=False)
    test_db.add(menu)
    await test_db.flush()

    category = Category(menu_id=menu.id, name="Sushi", order=1, active=True)
    test_db.add(category)
    await test_db.commit()

    return restaurant


@pytest.fixture
async def other_menu(test_db, other_restaurant):
    result = await test_db.execute(select(Menu).where(Menu.client_id == other_restaurant.id))
    return result.scalar_one()


@pytest.fixture
async def other_category(test_db, other_menu):
    result = await test_db.execute(select(Category).where(Category.menu_id == other_menu.id))
    return result.scalar_one()


@pytest.fixture
async def test_user(test_db, test_restaurant):
    """Create a client admin of the test restaurant"""
    user = User(
        client_id=test_restaurant.id,
        email="test@example.com",
        hashed_password=get_password_hash("testpass123"),
        name="Test User",
        role=UserRole.CLIENT_ADMIN,
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def test_viewer(test_db, test_restaurant):
    """Create a read-only user of the test restaurant"""
    user = User(
        client_id=test_restaurant.id,
        email="viewer@example.com",
        hashed_password=get_password_hash("viewerpass123"),
        name="Viewer",
        role=UserRole.CLIENT_VIEWER,
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def test_admin_user(test_db):
    """Create a super admin user"""
    user = User(
        email="admin@example.com",
        hashed_password=get_password_hash("adminpass123"),
        name="Admin User",
        role=UserRole.SUPER_ADMIN,
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def make_client(test_db, tmp_path):
    """Factory for HTTP clients sharing the test database, optionally logged in"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_qr_code_service] = lambda: QRCodeService(
        test_db, output_dir=tmp_path / "qr-codes"
    )

    opened = []

    def factory(user=None):
        http_client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        if user is not None:
            http_client.headers["Authorization"] = f"Bearer {create_access_token(user)}"
        opened.append(http_client)
        return http_client

    yield factory

    for http_client in opened:
        await http_client.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
async def client(make_client):
    """Anonymous test client"""
    return make_client()


@pytest.fixture
async def authenticated_client(make_client, test_user):
    """Client admin of the test restaurant"""
    return make_client(test_user)


@pytest.fixture
async def viewer_client(make_client, test_viewer):
    return make_client(test_viewer)


@pytest.fixture
async def admin_client(make_client, test_admin_user):
    """Super admin"""
    return make_client(test_admin_user)
