"""
Marketing models.

A ``Campaign`` is the umbrella record; paid campaigns break down into ad sets,
ad content and per-content performance metrics. Email campaigns, social
posts and interaction analytics hang directly off a campaign. Leads are
tracked per company.
"""

from sqlalchemy import Boolean, Column, Date, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import relationship

from tenantdb.models.base import Base, TimestampMixin, UTCDateTime, fk_column, id_column


class Campaign(TimestampMixin, Base):
    __tablename__ = "campaigns"

    id = id_column()
    company_id = fk_column("companies.id", nullable=True, ondelete="CASCADE")
    name = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False, default="DRAFT")
    budget = Column(Numeric(12, 2))
    start_date = Column(Date)
    end_date = Column(Date)
    is_active = Column(Boolean, default=True, nullable=False)

    paid_campaigns = relationship("PaidCampaign", back_populates="campaign", passive_deletes=True)
    analytics = relationship("MarketingAnalytic", back_populates="campaign", passive_deletes=True)


class PaidCampaign(TimestampMixin, Base):
    __tablename__ = "paid_campaigns"

    id = id_column()
    campaign_id = fk_column("campaigns.id", ondelete="CASCADE")
    platform = Column(String(64), nullable=False)
    budget = Column(Numeric(12, 2), nullable=False)
    daily_budget = Column(Numeric(12, 2))
    details = Column(JSON)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    is_active = Column(Boolean, default=True, nullable=False)

    campaign = relationship("Campaign", back_populates="paid_campaigns")
    ad_sets = relationship("AdSet", back_populates="paid_campaign", passive_deletes=True)


class AdSet(TimestampMixin, Base):
    __tablename__ = "ad_sets"

    id = id_column()
    paid_campaign_id = fk_column("paid_campaigns.id", ondelete="CASCADE")
    name = Column(String(255), nullable=False)
    targeting = Column(JSON)
    budget = Column(Numeric(12, 2))
    status = Column(String(32), nullable=False, default="ACTIVE")

    paid_campaign = relationship("PaidCampaign", back_populates="ad_sets")
    ad_contents = relationship("AdContent", back_populates="ad_set", passive_deletes=True)


class AdContent(TimestampMixin, Base):
    __tablename__ = "ad_contents"

    id = id_column()
    ad_set_id = fk_column("ad_sets.id", ondelete="CASCADE")
    headline = Column(String(255), nullable=False)
    body_text = Column(Text, nullable=False)
    creative_type = Column(String(32), nullable=False)
    image_url = Column(String(512))
    destination_url = Column(String(512), nullable=False)
    status = Column(String(32), nullable=False)

    ad_set = relationship("AdSet", back_populates="ad_contents")


class PerformanceMetric(TimestampMixin, Base):
    __tablename__ = "performance_metrics"

    id = id_column()
    ad_content_id = fk_column("ad_contents.id", ondelete="CASCADE")
    metric_date = Column(Date, nullable=False)
    impressions = Column(Integer, default=0, nullable=False)
    clicks = Column(Integer, default=0, nullable=False)
    conversions = Column(Integer, default=0, nullable=False)
    spend = Column(Numeric(12, 2), default=0, nullable=False)

    ad_content = relationship("AdContent")


class EmailCampaign(TimestampMixin, Base):
    __tablename__ = "email_campaigns"

    id = id_column()
    campaign_id = fk_column("campaigns.id", ondelete="CASCADE")
    subject = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    recipients = Column(JSON, nullable=False)
    sent_at = Column(UTCDateTime())

    campaign = relationship("Campaign")


class Lead(TimestampMixin, Base):
    __tablename__ = "leads"

    id = id_column()
    company_id = fk_column("companies.id", nullable=True, ondelete="CASCADE")
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(64))
    source = Column(String(64), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)

    company = relationship("CompanyMain")


class MarketingAnalytic(TimestampMixin, Base):
    """One recorded interaction (click, open, view...) with a campaign."""
    __tablename__ = "marketing_analytics"

    id = id_column()
    campaign_id = fk_column("campaigns.id", ondelete="CASCADE")
    user_id = fk_column("users.id", nullable=True)
    interaction_type = Column(String(32), nullable=False)
    details = Column(JSON)
    timestamp = Column(UTCDateTime(), nullable=False)

    campaign = relationship("Campaign", back_populates="analytics")
    user = relationship("UserMain")


class SocialPost(TimestampMixin, Base):
    __tablename__ = "social_posts"

    id = id_column()
    campaign_id = fk_column("campaigns.id", nullable=True, ondelete="CASCADE")
    platform = Column(String(64), nullable=False)
    content = Column(Text, nullable=False)
    published_at = Column(UTCDateTime())
    likes = Column(Integer, default=0, nullable=False)
    shares = Column(Integer, default=0, nullable=False)
    comments = Column(Integer, default=0, nullable=False)

    campaign = relationship("Campaign")
