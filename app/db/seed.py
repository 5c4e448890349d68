# app/db/seed.py
import argparse
import asyncio
import logging
import random
from datetime import datetime, timezone, timedelta

from faker import Faker
from tqdm import tqdm

from app.core.security import hash_password
from app.db.session import connect_db_pool, get_pool, close_db_pool

logger = logging.getLogger(__name__)

fake = Faker("es_ES")

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "password123"
ADMIN_NAME = "Administrador"

BASE_CONTACTS = [
    {
        "name": "Juan Pérez",
        "email": "juan@example.com",
        "phone": "+1234567890",
        "address": "Calle Principal 123",
    },
    {
        "name": "María García",
        "email": "maria@example.com",
        "phone": "+0987654321",
        "address": "Avenida Central 456",
    },
]


async def insert_user(conn, email: str, hashed_password: str, name: str):
    sql = """
    INSERT INTO users (email, hashed_password, name)
    VALUES ($1, $2, $3)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, email, hashed_password, name)
    return rec["id"]


async def insert_contact(conn, owner_id, name: str, email: str, phone: str, address: str, created_at: datetime):
    sql = """
    INSERT INTO contacts (name, email, phone, address, owner_id, created_at)
    VALUES ($1, $2, $3, $4, $5, $6)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, name, email, phone, address, owner_id, created_at)
    return rec["id"]


def random_datetime_within_last_n_days(days: int = 90) -> datetime:
    now = datetime.now(tz=timezone.utc)
    return now - timedelta(seconds=random.randint(0, days * 24 * 3600))


def fake_contacts(count: int) -> list[dict]:
    contacts = []
    for _ in range(count):
        contacts.append({
            "name": fake.name(),
            "email": fake.unique.email(),
            "phone": fake.unique.numerify("+34#########"),
            "address": fake.street_address(),
        })
    return contacts


async def seed(extra_contacts: int = 0):
    await connect_db_pool()
    pool = await get_pool()
    if pool is None:
        raise RuntimeError("Database pool could not be initialized")

    async with pool.acquire() as conn:
        async with conn.transaction():
            logger.info("Clearing contacts and users...")
            await conn.execute("DELETE FROM contacts;")
            await conn.execute("DELETE FROM users;")

            owner_id = await insert_user(conn, ADMIN_EMAIL, hash_password(ADMIN_PASSWORD), ADMIN_NAME)
            logger.info("User created: %s", ADMIN_EMAIL)

            now = datetime.now(tz=timezone.utc)
            for contact in BASE_CONTACTS:
                await insert_contact(conn, owner_id, created_at=now, **contact)

            for contact in tqdm(fake_contacts(extra_contacts), desc="Generating contacts"):
                await insert_contact(conn, owner_id, created_at=random_datetime_within_last_n_days(), **contact)

    logger.info("Seed completed.")
    await close_db_pool()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Seed the contacts database")
    parser.add_argument("--extra-contacts", type=int, default=0, help="additional fake contacts for the admin user")
    args = parser.parse_args()
    asyncio.run(seed(args.extra_contacts))
