"""
Unit tests for the user repositories and their custom finders.
"""

from datetime import datetime, timedelta, timezone

import pytest

from tenantdb.exceptions import InvalidQueryError
from tenantdb.repositories import (UserActivityRepository, UserAddonRepository, UserMainRepository,
                                   UserSessionRepository, UserSettingsRepository)


@pytest.mark.asyncio
async def test_find_session_by_token(database, user):
    repo = UserSessionRepository(database)
    await repo.create({
        "user_id": user.id,
        "token": "tok-123",
        "ip_address": "10.0.0.1",
        "expires_at": datetime(2030, 1, 1, tzinfo=timezone.utc),
    })

    session = await repo.find_by_token("tok-123")

    assert session is not None
    assert session.user_id == user.id
    assert session.is_active is True
    assert session.to_dict()["user"]["email"] == "ada@example.com"
    assert await repo.find_by_token("unknown") is None


@pytest.mark.asyncio
async def test_find_settings_by_user_id(database, user, other_user):
    repo = UserSettingsRepository(database)
    await repo.create({"user_id": user.id, "theme": "dark"})

    settings = await repo.find_by_user_id(user.id)

    assert settings.theme == "dark"
    assert settings.sidebar_size == "default"
    assert settings.notifications_enabled is True
    assert settings.to_dict()["user"]["email"] == "ada@example.com"
    assert settings.to_dict()["user"]["display_name"] == "Ada Lovelace"
    assert await repo.find_by_user_id(other_user.id) is None


@pytest.mark.asyncio
async def test_addon_search_ignores_case(database):
    repo = UserAddonRepository(database)
    for name in ("Pro Storage", "Extra seats", "PROFESSIONAL support", "Priority queue"):
        await repo.create({"name": name, "price": 5, "currency": "EUR"})

    matches = await repo.search("pro")

    assert [addon.name for addon in matches] == ["PROFESSIONAL support", "Pro Storage"]
    assert [addon.name for addon in await repo.search("PRO", skip=1, take=5)] == ["Pro Storage"]
    assert await repo.search("gold") == []


@pytest.mark.asyncio
async def test_addon_search_treats_wildcards_literally(database):
    repo = UserAddonRepository(database)
    for name in ("Extra seats", "100% uptime", "team_pack"):
        await repo.create({"name": name, "price": 5, "currency": "EUR"})

    assert [addon.name for addon in await repo.search("%")] == ["100% uptime"]
    assert [addon.name for addon in await repo.search("_")] == ["team_pack"]
    assert await repo.search("0%u") == []


@pytest.mark.asyncio
async def test_activity_listing_uses_default_page_size(database, user):
    repo = UserActivityRepository(database)
    for index in range(3):
        await repo.create({"user_id": user.id, "action": f"login-{index}", "details": {"attempt": index}})

    activities = await repo.find_all(filters={"user_id": user.id}, include="user")

    assert len(activities) == 3
    assert repo.default_take == 100
    assert activities[0].to_dict()["user"]["display_name"] == "Ada Lovelace"
    assert {a.details["attempt"] for a in activities} == {0, 1, 2}


@pytest.mark.asyncio
async def test_deleting_user_removes_owned_rows(database, user):
    sessions = UserSessionRepository(database)
    created = await sessions.create({
        "user_id": user.id,
        "token": "tok-456",
        "expires_at": datetime(2030, 1, 1, tzinfo=timezone.utc),
    })

    await UserMainRepository(database).delete(user.id)

    assert await sessions.find_by_id(created.id) is None


@pytest.mark.asyncio
async def test_find_active_sessions_skips_expired(database, user, other_user):
    repo = UserSessionRepository(database)
    now = datetime.now(timezone.utc)
    await repo.create({"user_id": user.id, "token": "expired", "expires_at": now - timedelta(hours=1)})
    await repo.create({"user_id": user.id, "token": "later", "expires_at": now + timedelta(days=7)})
    await repo.create({"user_id": user.id, "token": "soon", "expires_at": now + timedelta(hours=1)})
    await repo.create({"user_id": other_user.id, "token": "other", "expires_at": now + timedelta(days=1)})

    active = await repo.find_active_by_user_id(user.id)

    assert [session.token for session in active] == ["soon", "later"]
    assert await repo.find_active_by_user_id("no-such-user") == []


@pytest.mark.asyncio
async def test_delete_all_sessions_of_user(database, user, other_user):
    repo = UserSessionRepository(database)
    expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)
    for token in ("tok-a", "tok-b"):
        await repo.create({"user_id": user.id, "token": token, "expires_at": expires_at})
    await repo.create({"user_id": other_user.id, "token": "tok-c", "expires_at": expires_at})

    assert await repo.delete_all_by_user_id(user.id) == 2
    assert await repo.count({"user_id": user.id}) == 0
    assert (await repo.find_by_token("tok-c")).user_id == other_user.id
    assert await repo.delete_all_by_user_id(user.id) == 0


@pytest.mark.asyncio
async def test_session_expiry_reads_back_in_utc(database, user):
    repo = UserSessionRepository(database)
    expires_at = datetime(2030, 1, 1, 12, 30, tzinfo=timezone(timedelta(hours=2)))
    created = await repo.create({"user_id": user.id, "token": "tok-tz", "expires_at": expires_at})

    stored = await repo.find_by_id(created.id)

    assert stored.expires_at == expires_at
    assert stored.expires_at.tzinfo is not None
    assert stored.expires_at.utcoffset() == timedelta(0)
    assert stored.expires_at.hour == 10
    assert stored.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_settings_create_or_update(database, user):
    repo = UserSettingsRepository(database)

    created = await repo.create_or_update(user.id, {"theme": "dark"})
    updated = await repo.create_or_update(user.id, {"theme": "light", "sidebar_size": "compact"})

    assert updated.id == created.id
    assert updated.theme == "light"
    assert updated.sidebar_size == "compact"
    assert await repo.count({"user_id": user.id}) == 1
    assert (await repo.find_by_user_id(user.id)).theme == "light"


@pytest.mark.asyncio
async def test_settings_create_or_update_rejects_unknown_fields(database, user):
    repo = UserSettingsRepository(database)

    with pytest.raises(InvalidQueryError):
        await repo.create_or_update(user.id, {"colour": "red"})
    with pytest.raises(InvalidQueryError):
        await repo.create_or_update(user.id, {"id": "fixed-id", "theme": "dark"})

    assert await repo.find_by_user_id(user.id) is None
