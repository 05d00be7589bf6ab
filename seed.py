"""
Seed script for AgencyHub - creates one demo account per role plus sample client users
Run: STORAGE_BACKEND=mongo python seed.py
"""
import asyncio
import logging

from config import USERS_KEY, STORAGE_BACKEND
from core.auth import get_password_hash
from core.permissions import Role
from database import KeyValueStore, create_store, load_value, save_value
from models.auth import StoredUser

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo123"

DEMO_ACCOUNTS = [
    {"id": "agency-user-1", "name": "John Doe", "email": "admin@agencyhub.io", "role": Role.AGENCY_ADMIN},
    {"id": "agency-user-2", "name": "Alice Smith", "email": "staff@agencyhub.io", "role": Role.AGENCY_STAFF},
    {"id": "client-user-1", "name": "Emma Wilson", "email": "admin@techcorp.com", "role": Role.CLIENT_ADMIN, "client_id": "client-1"},
    {"id": "client-user-2", "name": "Tom Baker", "email": "user@techcorp.com", "role": Role.CLIENT_USER, "client_id": "client-1"},
]

# Team page sample data; all of them work for TechCorp
SAMPLE_CLIENT_USERS = [
    {"name": "Sarah Johnson", "email": "sarah.johnson@client.com", "role": Role.CLIENT_USER, "joined": "2024-01-15"},
    {"name": "Michael Chen", "email": "michael.chen@client.com", "role": Role.CLIENT_USER, "joined": "2024-02-20"},
    {"name": "Emily Rodriguez", "email": "emily.rodriguez@client.com", "role": Role.CLIENT_ADMIN, "joined": "2024-01-10"},
    {"name": "David Kim", "email": "david.kim@client.com", "role": Role.CLIENT_USER, "joined": "2024-03-05", "is_active": False},
]


def _demo_users():
    password = get_password_hash(DEMO_PASSWORD)
    for account in DEMO_ACCOUNTS:
        yield StoredUser(password=password, has_completed_onboarding=True, **account)
    for sample in SAMPLE_CLIENT_USERS:
        yield StoredUser(
            name=sample["name"],
            email=sample["email"],
            password=password,
            role=sample["role"],
            client_id="client-1",
            has_completed_onboarding=True,
            is_active=sample.get("is_active", True),
            created_at=f"{sample['joined']}T09:00:00+00:00",
        )


async def seed_demo_users(store: KeyValueStore) -> int:
    """Add the demo accounts that are missing; returns how many were created."""
    users = await load_value(store, USERS_KEY, [])
    existing = {u.get("email", "").lower() for u in users}
    created = 0
    for user in _demo_users():
        if user.email.lower() in existing:
            continue
        users.append(user.model_dump(mode="json"))
        created += 1
    if created:
        if not await save_value(store, USERS_KEY, users):
            logger.error("Demo accounts could not be saved")
            return 0
        logger.info("Seeded %d demo accounts", created)
    return created


async def seed():
    print("Starting seed...")
    store = create_store()
    created = await seed_demo_users(store)
    print(f"{created} demo account(s) created" if created else "Demo accounts already exist, skipping...")

    print("\n--- Seed complete! ---")
    print("Login credentials (all accounts):")
    for account in DEMO_ACCOUNTS:
        print(f"  {account['role'].value}: {account['email']} / {DEMO_PASSWORD}")
    if STORAGE_BACKEND == "memory":
        print("\nNote:")
        print("  - The memory backend forgets everything on exit; set STORAGE_BACKEND=mongo to keep the accounts")

    store.close()


if __name__ == "__main__":
    asyncio.run(seed())
