#!/usr/bin/env python3
import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import jwt

# Add the project root to Python path so we can import dialogue_api
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from prisma import Prisma

from dialogue_api.core.settings import settings
from dialogue_api.shared.permissions import ROLE_PERMISSIONS, RoleName

TEST_USER_ID = "test_user_123"


async def seed_roles(prisma: Prisma) -> dict[RoleName, str]:
    """Upsert the built-in roles with the registry's permissions."""
    role_ids: dict[RoleName, str] = {}
    for role_name, permissions in ROLE_PERMISSIONS.items():
        permission_values = sorted(p.value for p in permissions)
        role = await prisma.role.upsert(
            where={"name": role_name.value},
            data={
                "create": {"name": role_name.value, "permissions": permission_values},
                "update": {"permissions": permission_values},
            },
        )
        role_ids[role_name] = role.id
        print(f"✅ Role {role_name.value}: {', '.join(permission_values)}")
    return role_ids


async def main():
    print("🌱 Starting database seed...")

    prisma = Prisma()
    await prisma.connect()

    try:
        role_ids = await seed_roles(prisma)

        # Give the test user the basic role
        await prisma.userrole.upsert(
            where={
                "userId_roleId": {
                    "userId": TEST_USER_ID,
                    "roleId": role_ids[RoleName.USER],
                }
            },
            data={
                "create": {
                    "userId": TEST_USER_ID,
                    "roleId": role_ids[RoleName.USER],
                    "assignedBy": "system_init",
                },
                "update": {},
            },
        )
        print(f"✅ Assigned {RoleName.USER.value} to {TEST_USER_ID}")

        existing = await prisma.dialogue.find_first(where={"userId": TEST_USER_ID})
        if not existing:
            dialogue = await prisma.dialogue.create(
                data={
                    "userId": TEST_USER_ID,
                    "title": "Test Dialogue",
                    "description": "A test dialogue for development",
                    "genre": "OTHER",
                    "hashtags": ["test", "development"],
                }
            )
            print(f"✅ Created dialogue: {dialogue.id}")
        else:
            print(f"ℹ️ Dialogue already exists: {existing.id}")

        # Development token, only meaningful when JWT_SECRET is configured
        if settings.JWT_SECRET:
            now = datetime.now(timezone.utc)
            token = jwt.encode(
                {"sub": TEST_USER_ID, "iat": now, "exp": now + timedelta(days=7)},
                settings.JWT_SECRET,
                algorithm="HS256",
            )
            print("📋 Test user details:")
            print(f"   User ID: {TEST_USER_ID}")
            print(f"   Authorization Header: Bearer {token}")

        print("🌱 Seed completed successfully!")

    except Exception as e:
        print(f"❌ Seed failed: {e}")
        raise
    finally:
        await prisma.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
