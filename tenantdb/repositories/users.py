"""
Repositories for users and their plans, billing, sessions and preferences.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import delete, select

from tenantdb.models import (UserActivity, UserAddon, UserBilling, UserMain, UserPlan, UserSession,
                             UserSettings, UserSubscription)
from tenantdb.models.base import utcnow
from tenantdb.repositories.base import BaseRepository, Relation

logger = logging.getLogger(__name__)

USER_SUMMARY = ("email", "display_name")


class UserMainRepository(BaseRepository[UserMain]):
    """Repository for user accounts."""

    model = UserMain
    label = "user"
    relations = {
        "company_memberships": Relation(
            "company_memberships",
            ("company_id", "role", "is_active"),
            (Relation("company", ("name", "slug")),)
        ),
    }
    filter_fields = ("email", "username", "is_active", "created_at")
    sort_fields = ("email", "username", "display_name", "created_at")


class UserActivityRepository(BaseRepository[UserActivity]):
    model = UserActivity
    label = "user activity"
    relations = {"user": Relation("user", USER_SUMMARY)}
    filter_fields = ("user_id", "action", "created_at")
    default_take = 100


class UserPlanRepository(BaseRepository[UserPlan]):
    model = UserPlan
    label = "user plan"
    relations = {"subscriptions": Relation("subscriptions", ("user_id", "status", "start_date"))}
    filter_fields = ("name", "currency", "billing_frequency", "is_active", "start_date", "end_date")
    sort_fields = ("name", "base_price", "start_date", "created_at")


class UserAddonRepository(BaseRepository[UserAddon]):
    model = UserAddon
    label = "user addon"
    filter_fields = ("name", "currency", "is_active", "price")
    sort_fields = ("name", "price", "created_at")

    async def search(self, name_fragment: str, skip: int = 0, take: Optional[int] = None) -> List[UserAddon]:
        """
        Find addons whose name contains ``name_fragment``, ignoring case.

        The fragment is matched literally; ``%`` and ``_`` are not wildcards.

        Args:
            name_fragment (str): text to look for
            skip (int): Number of records to skip
            take (int, optional): Maximum number of records to return

        Returns:
            List[UserAddon]: matches ordered by name
        """
        if skip < 0 or (take is not None and take < 0):
            raise self._reject("skip and take must not be negative.")

        statement = (
            select(UserAddon)
            .where(UserAddon.name.icontains(name_fragment, autoescape=True))
            .order_by(*self._order_clause("name"))
            .offset(skip)
        )
        if take is not None:
            statement = statement.limit(take)
        return await self._many(statement)


class UserSubscriptionRepository(BaseRepository[UserSubscription]):
    model = UserSubscription
    label = "user subscription"
    relations = {
        "user": Relation("user", USER_SUMMARY),
        "plan": Relation("plan", ("name", "base_price", "currency", "billing_frequency")),
    }
    filter_fields = ("user_id", "plan_id", "status", "is_active", "start_date", "end_date")
    sort_fields = ("start_date", "end_date", "created_at")


class UserBillingRepository(BaseRepository[UserBilling]):
    model = UserBilling
    label = "user billing"
    relations = {
        "user": Relation("user", USER_SUMMARY),
        "invoice": Relation("invoice", ("invoice_number", "amount", "status", "due_date")),
    }
    filter_fields = ("user_id", "invoice_id", "status", "currency", "due_date", "payment_date", "amount_due")
    sort_fields = ("due_date", "payment_date", "amount_due", "created_at")


class UserSessionRepository(BaseRepository[UserSession]):
    """Repository for login sessions."""

    model = UserSession
    label = "user session"
    relations = {"user": Relation("user", USER_SUMMARY)}
    filter_fields = ("user_id", "is_active", "expires_at")
    sort_fields = ("expires_at", "created_at")

    async def find_by_token(self, token: str) -> Optional[UserSession]:
        """Get the session holding ``token``, with its user summary."""
        statement = (
            select(UserSession)
            .where(UserSession.token == token)
            .options(*self._include_options(["user"]))
        )
        return await self._one(statement)

    async def find_active_by_user_id(self, user_id: str) -> List[UserSession]:
        """Get the sessions of a user that have not expired yet, soonest expiry first."""
        return await self.find_all(
            filters={"user_id": user_id, "expires_at__gt": utcnow()},
            order_by="expires_at"
        )

    async def delete_all_by_user_id(self, user_id: str) -> int:
        """
        Delete every session of a user, for example on a global sign-out.

        Returns:
            int: number of sessions removed; 0 when the user had none
        """
        statement = delete(UserSession).where(UserSession.user_id == user_id)
        async with self._unit_of_work("delete") as session:
            result = await session.execute(statement)
            await session.commit()
        logger.info(f"Deleted {result.rowcount} session(s) of user {user_id}")
        return result.rowcount


class UserSettingsRepository(BaseRepository[UserSettings]):
    model = UserSettings
    label = "user settings"
    relations = {"user": Relation("user", USER_SUMMARY)}
    filter_fields = ("user_id", "theme", "notifications_enabled")

    async def find_by_user_id(self, user_id: str) -> Optional[UserSettings]:
        """Get the settings row of a user; each user has at most one."""
        statement = (
            select(UserSettings)
            .where(UserSettings.user_id == user_id)
            .options(*self._include_options(["user"]))
        )
        return await self._one(statement)

    async def create_or_update(self, user_id: str, data: Mapping[str, Any]) -> UserSettings:
        """
        Store the settings of a user, creating the row on first use.

        Existing settings are merged with ``data`` the same way :meth:`update`
        merges; a missing row is created from ``data``.

        Args:
            user_id (str): owner of the settings
            data (Mapping[str, Any]): settings fields to store

        Returns:
            UserSettings: the stored settings
        """
        data = {name: value for name, value in data.items() if name != "user_id"}
        self._check_fields(data, updating=True)
        async with self._unit_of_work("save") as session:
            result = await session.execute(select(UserSettings).where(UserSettings.user_id == user_id))
            settings = result.scalar_one_or_none()
            created = settings is None
            if created:
                settings = UserSettings(user_id=user_id, **data)
                session.add(settings)
            else:
                for name, value in data.items():
                    setattr(settings, name, value)
            await session.commit()
            await session.refresh(settings)
        logger.info(f"{'Created' if created else 'Updated'} settings of user {user_id}")
        return settings
