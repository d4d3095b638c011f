"""Initialize database tables"""
import asyncio
from products_api.database import init_db


async def init():
    await init_db()
    print("Database tables created successfully.")


if __name__ == "__main__":
    asyncio.run(init())
