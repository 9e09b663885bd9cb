#!/usr/bin/env python3
"""Seed the database with the sample catalog."""

import asyncio

from sqlalchemy import select

from catalog_search.db.base import async_session_maker, create_tables
from catalog_search.db.models import Product
from catalog_search.sample_data import SAMPLE_PRODUCTS


async def seed_products() -> None:
    """Insert sample products that aren't in the catalog yet."""
    await create_tables()
    async with async_session_maker() as session:
        for product_data in SAMPLE_PRODUCTS:
            result = await session.execute(
                select(Product).where(Product.slug == product_data["slug"])
            )
            if result.scalar_one_or_none():
                print(f"Product '{product_data['slug']}' already exists, skipping...")
                continue

            session.add(Product(**product_data))
            print(f"Created product: {product_data['name']}")

        await session.commit()
        print("\nSeeding complete!")


if __name__ == "__main__":
    asyncio.run(seed_products())
