"""
Repositories for the CRM module: contacts, tickets, messages and feedback.
"""

from tenantdb.models import CrmCompanyContact, CrmFeedback, CrmMessage, CrmTicket
from tenantdb.repositories.base import BaseRepository, Relation

COMPANY_SUMMARY = ("name", "slug")
USER_SUMMARY = ("email", "display_name")


class CrmCompanyContactRepository(BaseRepository[CrmCompanyContact]):
    model = CrmCompanyContact
    label = "contact"
    relations = {
        "company": Relation("company", COMPANY_SUMMARY),
        "created_by_user": Relation("created_by_user", USER_SUMMARY),
    }
    filter_fields = ("company_id", "created_by_user_id", "email", "last_name")
    sort_fields = ("first_name", "last_name", "created_at")


class CrmTicketRepository(BaseRepository[CrmTicket]):
    """Repository for support tickets."""

    model = CrmTicket
    label = "ticket"
    relations = {
        "company": Relation("company", COMPANY_SUMMARY),
        "user": Relation("user", USER_SUMMARY),
        "assigned_to": Relation("assigned_to", USER_SUMMARY),
        "messages": Relation(
            "messages",
            ("body", "sender_id", "created_at"),
            (Relation("sender", USER_SUMMARY),)
        ),
    }
    filter_fields = ("company_id", "user_id", "assigned_to_user_id", "status", "priority", "created_at")
    sort_fields = ("status", "priority", "created_at", "updated_at")


class CrmMessageRepository(BaseRepository[CrmMessage]):
    model = CrmMessage
    label = "message"
    relations = {
        "ticket": Relation("ticket", ("subject", "status")),
        "sender": Relation("sender", USER_SUMMARY),
        "company": Relation("company", COMPANY_SUMMARY),
    }
    filter_fields = ("ticket_id", "sender_id", "company_id", "created_at")
    default_order = ("created_at",)


class CrmFeedbackRepository(BaseRepository[CrmFeedback]):
    model = CrmFeedback
    label = "feedback"
    relations = {
        "company": Relation("company", COMPANY_SUMMARY),
        "user": Relation("user", USER_SUMMARY),
    }
    filter_fields = ("company_id", "user_id", "feedback_type")
