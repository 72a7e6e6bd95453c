"""
Tenant (company) models: the company record, its plans, add-ons,
subscriptions, billing, settings and user memberships.
"""

from sqlalchemy import Boolean, Column, Date, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from tenantdb.models.base import ID_LENGTH, Base, TimestampMixin, fk_column, id_column


class CompanyMain(TimestampMixin, Base):
    """
    A tenant.

    Attributes:
        id (str): Primary key
        name (str): Display name
        slug (str): Unique URL-safe identifier
        is_active (bool): Whether the tenant is enabled

    Relationships:
        users: memberships (CompanyUser)
        subscriptions: plan subscriptions
        projects: momentum projects owned by the company
    """
    __tablename__ = "companies"

    id = id_column()
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    users = relationship("CompanyUser", back_populates="company", passive_deletes=True)
    subscriptions = relationship("CompanySubscription", back_populates="company", passive_deletes=True)
    projects = relationship("MomentumProject", back_populates="company", passive_deletes=True)


class CompanyPlan(TimestampMixin, Base):
    """Plan a company can subscribe to. ``billing_frequency`` is MONTHLY or YEARLY."""
    __tablename__ = "company_plans"

    id = id_column()
    name = Column(String(255), nullable=False)
    description = Column(Text)
    base_price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    billing_frequency = Column(String(16), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)

    subscriptions = relationship("CompanySubscription", back_populates="plan", passive_deletes=True)


class CompanyAddon(TimestampMixin, Base):
    __tablename__ = "company_addons"

    id = id_column()
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class CompanySubscription(TimestampMixin, Base):
    __tablename__ = "company_subscriptions"

    id = id_column()
    company_id = fk_column("companies.id", ondelete="CASCADE")
    plan_id = fk_column("company_plans.id")
    status = Column(String(32), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)

    company = relationship("CompanyMain", back_populates="subscriptions")
    plan = relationship("CompanyPlan", back_populates="subscriptions")


class CompanyUser(TimestampMixin, Base):
    """Membership of a user in a company, one row per (company, user) pair."""
    __tablename__ = "company_users"

    company_id = Column(String(ID_LENGTH), ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role = Column(String(32), nullable=False, default="MEMBER")
    is_active = Column(Boolean, default=True, nullable=False)

    company = relationship("CompanyMain", back_populates="users")
    user = relationship("UserMain", back_populates="company_memberships")


class CompanyBilling(TimestampMixin, Base):
    __tablename__ = "company_billings"

    billing_id = id_column()
    company_id = fk_column("companies.id", ondelete="CASCADE")
    invoice_id = fk_column("finance_invoices.id", nullable=True)
    amount_due = Column(Numeric(12, 2), nullable=False)
    amount_paid = Column(Numeric(12, 2), default=0, nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(String(32), nullable=False)
    due_date = Column(Date, nullable=False)
    payment_date = Column(Date)

    company = relationship("CompanyMain")
    invoice = relationship("FinanceInvoice", back_populates="company_billings")


class CompanySetting(TimestampMixin, Base):
    """Free-form key/value setting, unique per company and name."""
    __tablename__ = "company_settings"
    __table_args__ = (UniqueConstraint("company_id", "setting_name"),)

    setting_id = id_column()
    company_id = fk_column("companies.id", ondelete="CASCADE")
    setting_name = Column(String(128), nullable=False)
    setting_value = Column(Text)

    company = relationship("CompanyMain")
