"""
Shared database setup for tests that need a real (SQLite) database.
"""

import os
import tempfile
import unittest
from datetime import datetime, timedelta
from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from corphub.database.models import CompanyProfile, User
from corphub.database.session import init_db, transaction


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(db_path: str):
    # NullPool: every session opens its own connection on the running loop
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return engine


def profile_fields(**overrides) -> Dict[str, Any]:
    fields = {
        "company_name": "Acme Analytics",
        "address": "221B Baker Street",
        "city": "Pune",
        "state": "Maharashtra",
        "country": "India",
        "postal_code": "411001",
        "website": "https://acme.example.com",
        "industry": "Technology",
        "founded_date": datetime(2015, 6, 1).date(),
        "description": "Data tooling for small teams",
        "social_links": {"linkedin": "https://www.linkedin.com/company/acme"},
    }
    fields.update(overrides)
    return fields


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Creates a fresh temporary database for every test."""

    async def asyncSetUp(self):
        fd, self.db_path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        self.engine = make_engine(self.db_path)
        await init_db(self.engine)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._user_counter = 0

    async def asyncTearDown(self):
        await self.engine.dispose()
        os.remove(self.db_path)

    async def create_user(self, **overrides) -> User:
        self._user_counter += 1
        values = {
            "email": f"owner{self._user_counter}@example.com",
            "mobile_no": f"+9198765000{self._user_counter:02d}",
            "full_name": f"Owner {self._user_counter}",
            "is_email_verified": True,
        }
        values.update(overrides)
        async with transaction(self.session_factory) as db:
            user = User(**values)
            db.add(user)
        return user

    async def insert_profile(self, owner: User, created_at: datetime = None, **overrides) -> CompanyProfile:
        """Insert a profile directly, bypassing the repository."""
        created_at = created_at or datetime.utcnow()
        async with transaction(self.session_factory) as db:
            profile = CompanyProfile(
                owner_id=owner.id,
                created_at=created_at,
                updated_at=created_at,
                **profile_fields(**overrides),
            )
            db.add(profile)
        return profile

    async def seed_profiles(self, count: int, **overrides):
        """Insert ``count`` profiles, one minute apart, named Company 01..N."""
        base = datetime(2024, 1, 1, 9, 0, 0)
        profiles = []
        for i in range(1, count + 1):
            owner = await self.create_user()
            profiles.append(
                await self.insert_profile(
                    owner,
                    created_at=base + timedelta(minutes=i),
                    company_name=f"Company {i:02d}",
                    **overrides,
                )
            )
        return profiles
