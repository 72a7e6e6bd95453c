"""
Repositories for campaigns, paid advertising, leads and engagement data.

Campaign aggregation and reporting are left to callers; these repositories
store and return records as given.
"""

from tenantdb.models import (AdContent, AdSet, Campaign, EmailCampaign, Lead, MarketingAnalytic, PaidCampaign,
                             PerformanceMetric, SocialPost)
from tenantdb.repositories.base import BaseRepository, Relation

CAMPAIGN_SUMMARY = ("name", "type", "status")


class CampaignRepository(BaseRepository[Campaign]):
    model = Campaign
    label = "campaign"
    relations = {
        "paid_campaigns": Relation("paid_campaigns", ("platform", "budget", "is_active")),
        "analytics": Relation("analytics", ("interaction_type", "timestamp")),
    }
    filter_fields = ("company_id", "type", "status", "is_active", "start_date", "end_date")
    sort_fields = ("name", "start_date", "budget", "created_at")


class PaidCampaignRepository(BaseRepository[PaidCampaign]):
    model = PaidCampaign
    label = "paid campaign"
    relations = {
        "campaign": Relation("campaign", CAMPAIGN_SUMMARY),
        "ad_sets": Relation(
            "ad_sets",
            ("name", "status", "budget"),
            (Relation("ad_contents", ("headline", "status")),)
        ),
    }
    filter_fields = ("campaign_id", "platform", "is_active", "start_date", "end_date", "budget")
    sort_fields = ("start_date", "budget", "created_at")


class AdSetRepository(BaseRepository[AdSet]):
    model = AdSet
    label = "ad set"
    relations = {
        "paid_campaign": Relation("paid_campaign", ("platform", "budget")),
        "ad_contents": Relation("ad_contents", ("headline", "creative_type", "status")),
    }
    filter_fields = ("paid_campaign_id", "status")
    sort_fields = ("name", "budget", "created_at")


class AdContentRepository(BaseRepository[AdContent]):
    model = AdContent
    label = "ad content"
    relations = {"ad_set": Relation("ad_set", ("name", "status"))}
    filter_fields = ("ad_set_id", "creative_type", "status")


class PerformanceMetricRepository(BaseRepository[PerformanceMetric]):
    model = PerformanceMetric
    label = "performance metric"
    relations = {"ad_content": Relation("ad_content", ("headline", "ad_set_id"))}
    filter_fields = ("ad_content_id", "metric_date", "impressions", "clicks", "conversions", "spend")
    sort_fields = ("metric_date", "impressions", "clicks", "conversions", "spend", "created_at")
    default_order = ("-metric_date",)


class EmailCampaignRepository(BaseRepository[EmailCampaign]):
    model = EmailCampaign
    label = "email campaign"
    relations = {"campaign": Relation("campaign", CAMPAIGN_SUMMARY)}
    filter_fields = ("campaign_id", "sent_at")
    sort_fields = ("sent_at", "created_at")


class LeadRepository(BaseRepository[Lead]):
    model = Lead
    label = "lead"
    relations = {"company": Relation("company", ("name", "slug"))}
    filter_fields = ("company_id", "email", "source", "is_active", "start_date", "end_date")
    sort_fields = ("name", "start_date", "created_at")


class MarketingAnalyticRepository(BaseRepository[MarketingAnalytic]):
    model = MarketingAnalytic
    label = "marketing analytic"
    relations = {
        "campaign": Relation("campaign", CAMPAIGN_SUMMARY),
        "user": Relation("user", ("email", "display_name")),
    }
    filter_fields = ("campaign_id", "user_id", "interaction_type", "timestamp")
    sort_fields = ("timestamp", "created_at")
    default_order = ("-timestamp",)
    default_take = 500


class SocialPostRepository(BaseRepository[SocialPost]):
    model = SocialPost
    label = "social post"
    relations = {"campaign": Relation("campaign", CAMPAIGN_SUMMARY)}
    filter_fields = ("campaign_id", "platform", "published_at", "likes", "shares", "comments")
    sort_fields = ("published_at", "likes", "shares", "comments", "created_at")
