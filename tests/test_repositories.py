"""
Jotter Backend — Store Tests
===============================

What:  UserRepository lookups against a real SQLite schema.
"""

import pytest

from jotter.models.user import AuthProvider, User
from jotter.repositories import UserRepository


@pytest.fixture
def ada():
    return User(name="Ada", email="ada@example.com", auth_provider=AuthProvider.EMAIL, is_verified=True)


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_get_by_email_normalises_raw_input(self, session_factory, ada):
        async with session_factory() as session:
            users = UserRepository(session)
            users.add(ada)
            await users.save()

            found = await users.get_by_email("  ADA@Example.COM ")
            assert found is not None
            assert found.id == ada.id

    @pytest.mark.asyncio
    async def test_google_id_match_wins_over_email(self, session_factory, ada):
        linked = User(
            name="Grace",
            email="grace@example.com",
            google_id="sub-1",
            auth_provider=AuthProvider.GOOGLE,
            is_verified=True,
        )
        async with session_factory() as session:
            users = UserRepository(session)
            users.add(ada)
            users.add(linked)
            await users.save()

            found = await users.get_by_email_or_google_id("Ada@example.com", "sub-1")
            assert found.id == linked.id
