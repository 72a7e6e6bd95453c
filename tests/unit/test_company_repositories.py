"""
Unit tests for the company repositories.
"""

from datetime import date

import pytest

from tenantdb.exceptions import InvalidQueryError, PersistenceError
from tenantdb.repositories import (CompanyBillingRepository, CompanyMainRepository, CompanyPlanRepository,
                                   CompanySettingRepository, CompanySubscriptionRepository, CompanyUserRepository)


@pytest.mark.asyncio
async def test_company_lifecycle_by_slug(database):
    """Create a company, look it up by slug, delete it, and confirm it is gone."""
    repo = CompanyMainRepository(database)

    created = await repo.create({"name": "Acme", "slug": "acme"})

    found = await repo.find_by_slug("acme")
    assert found is not None
    assert found.id == created.id
    assert found.name == "Acme"
    assert found.slug == "acme"

    await repo.delete(created.id)

    assert await repo.find_by_id(created.id) is None
    assert await repo.find_by_slug("acme") is None


@pytest.mark.asyncio
async def test_find_by_slug_returns_fixed_projection(database, company, project):
    found = await CompanyMainRepository(database).find_by_slug("acme")
    data = found.to_dict()

    assert set(data) == {"id", "name", "slug", "projects"}
    assert len(data["projects"]) == 1
    summary = data["projects"][0]
    assert summary["name"] == "Platform"
    assert summary["key"] == "PLAT"
    assert "description" not in summary


@pytest.mark.asyncio
async def test_company_user_composite_key(database, company, user, other_user):
    repo = CompanyUserRepository(database)

    member = await repo.create({"company_id": company.id, "user_id": user.id})
    assert member.role == "MEMBER"
    await repo.create({"company_id": company.id, "user_id": other_user.id, "role": "ADMIN"})

    with pytest.raises(PersistenceError):
        await repo.create({"company_id": company.id, "user_id": user.id})

    by_tuple = await repo.find_unique((company.id, user.id))
    by_dict = await repo.find_unique({"user_id": other_user.id, "company_id": company.id})
    assert by_tuple.user_id == user.id
    assert by_dict.role == "ADMIN"

    members = await repo.find_many(filters={"company_id": company.id}, order_by="role", include=["user"])
    assert [m.to_dict()["user"]["email"] for m in members] == ["grace@example.com", "ada@example.com"]

    updated = await repo.update((company.id, user.id), {"role": "OWNER"})
    assert updated.role == "OWNER"

    removed = await repo.remove((company.id, user.id))
    assert removed.role == "OWNER"
    assert await repo.find_unique((company.id, user.id)) is None
    assert await repo.count({"company_id": company.id}) == 1


@pytest.mark.asyncio
async def test_company_user_key_must_be_complete(database, company):
    repo = CompanyUserRepository(database)

    with pytest.raises(InvalidQueryError):
        await repo.find_unique(company.id)
    with pytest.raises(InvalidQueryError):
        await repo.find_unique({"company_id": company.id})
    with pytest.raises(InvalidQueryError):
        await repo.update((company.id, "u-1"), {"user_id": "u-2"})


@pytest.mark.asyncio
async def test_deleting_company_cascades_to_memberships(database, company, user):
    members = CompanyUserRepository(database)
    await members.create({"company_id": company.id, "user_id": user.id})

    await CompanyMainRepository(database).delete(company.id)

    assert await members.find_unique((company.id, user.id)) is None


@pytest.mark.asyncio
async def test_subscriptions_by_company_include_plan_summary(database, company):
    plan = await CompanyPlanRepository(database).create({
        "name": "Team",
        "base_price": 49,
        "currency": "EUR",
        "billing_frequency": "MONTHLY",
        "start_date": date(2024, 1, 1),
    })
    repo = CompanySubscriptionRepository(database)
    await repo.create({
        "company_id": company.id,
        "plan_id": plan.id,
        "status": "ACTIVE",
        "start_date": date(2024, 2, 1),
    })

    subscriptions = await repo.find_all_by_company_id(company.id)

    assert len(subscriptions) == 1
    data = subscriptions[0].to_dict()
    assert data["status"] == "ACTIVE"
    assert data["plan"]["name"] == "Team"
    assert "start_date" not in data["plan"]
    assert "company" not in data
    assert await repo.find_all_by_company_id("other-company") == []


@pytest.mark.asyncio
async def test_billing_and_settings_use_their_own_key_names(database, company):
    billing = await CompanyBillingRepository(database).create({
        "company_id": company.id,
        "amount_due": 120,
        "currency": "EUR",
        "status": "PENDING",
        "due_date": date(2024, 3, 1),
    })
    assert billing.billing_id

    settings = CompanySettingRepository(database)
    setting = await settings.create({"company_id": company.id, "setting_name": "timezone", "setting_value": "UTC"})
    assert setting.setting_id

    updated = await settings.update(setting.setting_id, {"setting_value": "Europe/Amsterdam"})
    assert updated.setting_value == "Europe/Amsterdam"

    with pytest.raises(PersistenceError):
        await settings.create({"company_id": company.id, "setting_name": "timezone", "setting_value": "UTC"})

    paid = await CompanyBillingRepository(database).update(billing.billing_id, {"status": "PAID"})
    assert paid.status == "PAID"
    assert paid.due_date == date(2024, 3, 1)
