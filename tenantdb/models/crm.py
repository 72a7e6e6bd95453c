"""
CRM models: company contacts, support tickets with their messages, and
customer feedback.
"""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from tenantdb.models.base import Base, TimestampMixin, fk_column, id_column


class CrmCompanyContact(TimestampMixin, Base):
    __tablename__ = "crm_company_contacts"

    id = id_column()
    company_id = fk_column("companies.id", ondelete="CASCADE")
    created_by_user_id = fk_column("users.id", nullable=True)
    first_name = Column(String(128), nullable=False)
    last_name = Column(String(128))
    email = Column(String(255))
    phone = Column(String(64))
    job_title = Column(String(128))
    notes = Column(Text)

    company = relationship("CompanyMain")
    created_by_user = relationship("UserMain")


class CrmTicket(TimestampMixin, Base):
    """
    Support ticket raised by a user of a company.

    ``status`` and ``priority`` hold the enum names verbatim
    (OPEN/IN_PROGRESS/RESOLVED/CLOSED, LOW/MEDIUM/HIGH/URGENT).
    """
    __tablename__ = "crm_tickets"

    id = id_column()
    company_id = fk_column("companies.id", ondelete="CASCADE")
    user_id = fk_column("users.id")
    assigned_to_user_id = fk_column("users.id", nullable=True)
    subject = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(String(32), nullable=False, default="OPEN")
    priority = Column(String(32), nullable=False, default="MEDIUM")
    assignee_notes = Column(Text)

    company = relationship("CompanyMain")
    user = relationship("UserMain", foreign_keys=[user_id])
    assigned_to = relationship("UserMain", foreign_keys=[assigned_to_user_id])
    messages = relationship("CrmMessage", back_populates="ticket", passive_deletes=True)


class CrmMessage(TimestampMixin, Base):
    __tablename__ = "crm_messages"

    id = id_column()
    ticket_id = fk_column("crm_tickets.id", ondelete="CASCADE")
    sender_id = fk_column("users.id")
    company_id = fk_column("companies.id", ondelete="CASCADE")
    body = Column(Text, nullable=False)

    ticket = relationship("CrmTicket", back_populates="messages")
    sender = relationship("UserMain")
    company = relationship("CompanyMain")


class CrmFeedback(TimestampMixin, Base):
    __tablename__ = "crm_feedback"

    id = id_column()
    company_id = fk_column("companies.id", ondelete="CASCADE")
    user_id = fk_column("users.id")
    feedback_type = Column(String(32), nullable=False)
    body = Column(Text, nullable=False)

    company = relationship("CompanyMain")
    user = relationship("UserMain")
