#!/usr/bin/env python3
"""
Seed script to create a demo restaurant with a published menu
"""

import asyncio

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from qrmenu.database import SessionLocal, engine, Base
    from qrmenu.models.client import Client
    from qrmenu.models.menu import Menu, Category, MenuItem
    from qrmenu.models.template import Template
    from qrmenu.models.user import User, UserRole

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo client already exists
        result = await db.execute(select(Client).where(Client.slug == "pizza-place"))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo template...")
        template = Template(
            name="Classic",
            description="Light background, serif headings, list layout",
            config={
                "colors": {
                    "primary": "#b91c1c",
                    "secondary": "#f59e0b",
                    "background": "#ffffff",
                    "text": "#111827",
                },
                "fonts": {"heading": "Playfair Display", "body": "Inter"},
                "layout": "list",
            },
        )
        db.add(template)

        print("Creating demo client...")
        client = Client(
            name="Pizza Place",
            slug="pizza-place",
            description="Wood-fired pizza since 1998",
            address="1 Vitosha Blvd, Sofia",
            phone="+359888123456",
            slogan="Hot and fresh",
            social_media={"instagram": "https://instagram.com/pizzaplace"},
        )
        db.add(client)
        await db.flush()

        menu = Menu(client_id=client.id, template_id=template.id, name="Main")
        db.add(menu)
        await db.flush()

        pizzas = Category(menu_id=menu.id, name="Pizzas", order=1)
        drinks = Category(menu_id=menu.id, name="Drinks", order=2)
        db.add_all([pizzas, drinks])
        await db.flush()

        menu_items = [
            MenuItem(
                category_id=pizzas.id,
                menu_id=menu.id,
                name="Margherita",
                description="Tomato, mozzarella, basil",
                price_bgn=12.00,
                price_eur=6.14,
                weight=450,
                weight_unit="g",
                tags=["vegetarian"],
                allergens=["gluten", "dairy"],
                addons=[{"name": "Extra cheese", "price": 1.5}],
                order=1,
            ),
            MenuItem(
                category_id=pizzas.id,
                menu_id=menu.id,
                name="Diavola",
                description="Tomato, mozzarella, spicy salami",
                price_bgn=14.50,
                price_eur=7.41,
                weight=480,
                weight_unit="g",
                tags=["spicy"],
                allergens=["gluten", "dairy"],
                order=2,
            ),
            MenuItem(
                category_id=drinks.id,
                menu_id=menu.id,
                name="Lemonade",
                price_bgn=4.00,
                price_eur=2.05,
                weight=330,
                weight_unit="ml",
                tags=["vegan"],
                order=1,
            ),
        ]
        db.add_all(menu_items)

        menu.published = True

        print("Creating demo users...")
        db.add_all([
            User(
                email="admin@qrmenu.local",
                hashed_password=pwd_context.hash("admin123"),
                name="Super Admin",
                role=UserRole.SUPER_ADMIN,
            ),
            User(
                client_id=client.id,
                email="owner@pizza-place.local",
                hashed_password=pwd_context.hash("pizza123"),
                name="Pizza Place Owner",
                role=UserRole.CLIENT_ADMIN,
            ),
        ])

        await db.commit()

        print(f"""
Demo data created successfully!

Client: {client.name}
  ID: {client.id}
  Public menu: /public/menu/{client.slug}

Users:
  Super Admin:
    Email: admin@qrmenu.local
    Password: admin123

  Restaurant Admin:
    Email: owner@pizza-place.local
    Password: pizza123

Menu: {len(menu_items)} items created
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
