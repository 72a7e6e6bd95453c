"""
Repositories for tenant companies, their plans, billing and membership.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import load_only, selectinload

from tenantdb.models import (CompanyAddon, CompanyBilling, CompanyMain, CompanyPlan, CompanySetting,
                             CompanySubscription, CompanyUser, MomentumProject)
from tenantdb.repositories.base import BaseRepository, Relation

COMPANY_SUMMARY = ("name", "slug")
USER_SUMMARY = ("email", "display_name")
PLAN_SUMMARY = ("name", "base_price", "currency", "billing_frequency")
INVOICE_SUMMARY = ("invoice_number", "amount", "status", "due_date")


class CompanyMainRepository(BaseRepository[CompanyMain]):
    """Repository for tenant companies."""

    model = CompanyMain
    label = "company"
    relations = {
        "users": Relation("users", ("role", "is_active"), (Relation("user", USER_SUMMARY),)),
        "subscriptions": Relation("subscriptions", ("status", "start_date", "end_date", "plan_id")),
        "projects": Relation("projects", ("name", "key")),
    }
    filter_fields = ("name", "slug", "is_active", "created_at")
    sort_fields = ("name", "slug", "created_at", "updated_at")

    async def find_by_slug(self, slug: str) -> Optional[CompanyMain]:
        """
        Get a company by its slug.

        Loads only the public summary of the company and its projects.

        Args:
            slug (str): unique company slug

        Returns:
            Optional[CompanyMain]: the company or None
        """
        statement = (
            select(CompanyMain)
            .where(CompanyMain.slug == slug)
            .options(
                load_only(CompanyMain.id, CompanyMain.name, CompanyMain.slug),
                selectinload(CompanyMain.projects).options(
                    load_only(MomentumProject.name, MomentumProject.key)
                ),
            )
        )
        return await self._one(statement)


class CompanyPlanRepository(BaseRepository[CompanyPlan]):
    model = CompanyPlan
    label = "company plan"
    relations = {"subscriptions": Relation("subscriptions", ("company_id", "status", "start_date"))}
    filter_fields = ("name", "currency", "billing_frequency", "is_active", "start_date", "end_date")
    sort_fields = ("name", "base_price", "start_date", "created_at")


class CompanyAddonRepository(BaseRepository[CompanyAddon]):
    model = CompanyAddon
    label = "company addon"
    filter_fields = ("name", "currency", "is_active", "price")
    sort_fields = ("name", "price", "created_at")


class CompanySubscriptionRepository(BaseRepository[CompanySubscription]):
    """Repository for company plan subscriptions."""

    model = CompanySubscription
    label = "company subscription"
    relations = {
        "company": Relation("company", COMPANY_SUMMARY),
        "plan": Relation("plan", PLAN_SUMMARY),
    }
    filter_fields = ("company_id", "plan_id", "status", "start_date", "end_date")
    sort_fields = ("start_date", "end_date", "created_at")

    async def find_all_by_company_id(self, company_id: str) -> List[CompanySubscription]:
        """Get every subscription of a company with its plan summary, newest first."""
        return await self.find_all(filters={"company_id": company_id}, include=["plan"])


class CompanyUserRepository(BaseRepository[CompanyUser]):
    """Repository for company membership, keyed by (company_id, user_id)."""

    model = CompanyUser
    key = ("company_id", "user_id")
    label = "company user"
    relations = {
        "company": Relation("company", COMPANY_SUMMARY),
        "user": Relation("user", USER_SUMMARY),
    }
    filter_fields = ("company_id", "user_id", "role", "is_active")
    sort_fields = ("role", "created_at")


class CompanyBillingRepository(BaseRepository[CompanyBilling]):
    model = CompanyBilling
    key = ("billing_id",)
    label = "company billing"
    relations = {
        "company": Relation("company", COMPANY_SUMMARY),
        "invoice": Relation("invoice", INVOICE_SUMMARY),
    }
    filter_fields = ("company_id", "invoice_id", "status", "currency", "due_date", "payment_date", "amount_due")
    sort_fields = ("due_date", "payment_date", "amount_due", "created_at")


class CompanySettingRepository(BaseRepository[CompanySetting]):
    model = CompanySetting
    key = ("setting_id",)
    label = "company setting"
    relations = {"company": Relation("company", COMPANY_SUMMARY)}
    filter_fields = ("company_id", "setting_name")
    sort_fields = ("setting_name", "created_at")
