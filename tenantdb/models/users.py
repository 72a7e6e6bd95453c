"""
User account models: the global user record plus per-user plans, add-ons,
subscriptions, billing, sessions, settings and the activity log.
"""

from sqlalchemy import Boolean, Column, Date, JSON, Numeric, String, Text
from sqlalchemy.orm import relationship

from tenantdb.models.base import Base, TimestampMixin, UTCDateTime, fk_column, id_column


class UserMain(TimestampMixin, Base):
    """
    Global user account.

    Attributes:
        id (str): Primary key
        email (str): Unique login email
        username (str): Optional unique handle
        display_name (str): Name shown in the UI
        avatar_url (str): URL of the profile picture
        is_active (bool): Whether the account is enabled
    """
    __tablename__ = "users"

    id = id_column()
    email = Column(String(255), unique=True, nullable=False)
    username = Column(String(64), unique=True)
    display_name = Column(String(255))
    avatar_url = Column(String(512))
    is_active = Column(Boolean, default=True, nullable=False)

    company_memberships = relationship("CompanyUser", back_populates="user", passive_deletes=True)


class UserActivity(TimestampMixin, Base):
    __tablename__ = "user_activities"

    id = id_column()
    user_id = fk_column("users.id", ondelete="CASCADE")
    action = Column(String(128), nullable=False)
    details = Column(JSON)

    user = relationship("UserMain")


class UserPlan(TimestampMixin, Base):
    """Plan a user can subscribe to. ``billing_frequency`` is MONTHLY or YEARLY."""
    __tablename__ = "user_plans"

    id = id_column()
    name = Column(String(255), nullable=False)
    description = Column(Text)
    base_price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    billing_frequency = Column(String(16), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)

    subscriptions = relationship("UserSubscription", back_populates="plan", passive_deletes=True)


class UserAddon(TimestampMixin, Base):
    __tablename__ = "user_addons"

    id = id_column()
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class UserSubscription(TimestampMixin, Base):
    __tablename__ = "user_subscriptions"

    id = id_column()
    user_id = fk_column("users.id", ondelete="CASCADE")
    plan_id = fk_column("user_plans.id")
    status = Column(String(32), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    is_active = Column(Boolean, default=True, nullable=False)

    user = relationship("UserMain")
    plan = relationship("UserPlan", back_populates="subscriptions")


class UserBilling(TimestampMixin, Base):
    __tablename__ = "user_billings"

    id = id_column()
    user_id = fk_column("users.id", ondelete="CASCADE")
    invoice_id = fk_column("finance_invoices.id", nullable=True)
    amount_due = Column(Numeric(12, 2), nullable=False)
    amount_paid = Column(Numeric(12, 2), default=0, nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(32), nullable=False)
    due_date = Column(Date, nullable=False)
    payment_date = Column(Date)

    user = relationship("UserMain")
    invoice = relationship("FinanceInvoice", back_populates="user_billings")


class UserSession(TimestampMixin, Base):
    """Login session. The token is opaque and unique."""
    __tablename__ = "user_sessions"

    id = id_column()
    user_id = fk_column("users.id", ondelete="CASCADE")
    token = Column(String(512), unique=True, nullable=False)
    ip_address = Column(String(64))
    device_info = Column(String(512))
    expires_at = Column(UTCDateTime(), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    user = relationship("UserMain")


class UserSettings(TimestampMixin, Base):
    __tablename__ = "user_settings"

    id = id_column()
    user_id = fk_column("users.id", ondelete="CASCADE", unique=True)
    theme = Column(String(32), default="light")
    sidebar_size = Column(String(16), default="default")
    notifications_enabled = Column(Boolean, default=True, nullable=False)

    user = relationship("UserMain")
