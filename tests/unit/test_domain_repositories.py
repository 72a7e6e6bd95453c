"""
Unit tests for the CRM, finance, marketing, momentum and people repositories.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from tenantdb.exceptions import PersistenceError
from tenantdb.repositories import (AdContentRepository, AdSetRepository, CampaignRepository, CrmMessageRepository,
                                   CrmTicketRepository, EmployeeRepository, FinanceCostRepository, FinanceInvoiceRepository,
                                   FinanceSupplierRepository, LeaveRepository, MomentumBoardMemberRepository,
                                   MomentumSprintMemberRepository, PaidCampaignRepository,
                                   PerformanceMetricRepository)


@pytest.mark.asyncio
async def test_ticket_with_messages_and_senders(database, company, user, other_user):
    ticket = await CrmTicketRepository(database).create({
        "company_id": company.id,
        "user_id": user.id,
        "assigned_to_user_id": other_user.id,
        "subject": "Invoice is wrong",
    })
    assert ticket.status == "OPEN"
    assert ticket.priority == "MEDIUM"

    await CrmMessageRepository(database).create({
        "ticket_id": ticket.id,
        "sender_id": user.id,
        "company_id": company.id,
        "body": "The VAT line is missing.",
    })

    found = await CrmTicketRepository(database).find_by_id(ticket.id, include=["messages", "assigned_to"])
    data = found.to_dict()

    assert data["assigned_to"]["email"] == "grace@example.com"
    assert len(data["messages"]) == 1
    message = data["messages"][0]
    assert message["body"] == "The VAT line is missing."
    assert message["sender"]["email"] == "ada@example.com"
    assert "user" not in data


@pytest.mark.asyncio
async def test_invoice_lookup_by_number(database):
    repo = FinanceInvoiceRepository(database)
    await repo.create({
        "billing_type": "COMPANY",
        "billing_id": "billing-1",
        "invoice_number": "INV-2024-001",
        "amount": Decimal("100.00"),
        "vat_amount": Decimal("21.00"),
        "currency": "EUR",
        "issue_date": date(2024, 1, 1),
        "due_date": date(2024, 1, 31),
    })

    invoice = await repo.find_by_invoice_number("INV-2024-001")
    data = invoice.to_dict()

    assert data["invoice_number"] == "INV-2024-001"
    assert data["status"] == "DRAFT"
    assert data["amount"] == Decimal("100.00")
    assert "is_active" not in data
    assert "ended_at" not in data
    assert await repo.find_by_invoice_number("INV-404") is None

    with pytest.raises(PersistenceError):
        await repo.create({
            "billing_type": "USER",
            "billing_id": "billing-2",
            "invoice_number": "INV-2024-001",
            "amount": Decimal("1.00"),
            "currency": "EUR",
            "issue_date": date(2024, 1, 1),
            "due_date": date(2024, 1, 31),
        })


@pytest.mark.asyncio
async def test_cost_range_filters(database):
    supplier = await FinanceSupplierRepository(database).create({"name": "Paper Co", "start_date": date(2023, 1, 1)})
    costs = FinanceCostRepository(database)
    for amount in ("10.00", "55.50", "300.00"):
        await costs.create({
            "cost_centre": "OPS",
            "amount": Decimal(amount),
            "currency": "EUR",
            "category": "SUPPLIES",
            "timestamp": datetime(2024, 5, 1, tzinfo=timezone.utc),
            "supplier_id": supplier.id,
        })

    mid_range = await costs.find_all(
        filters={"amount__gte": Decimal("50"), "amount__lt": Decimal("300")},
        order_by="amount",
    )

    assert [c.amount for c in mid_range] == [Decimal("55.50")]
    assert await costs.count({"supplier_id": supplier.id}) == 3

    with_costs = await FinanceSupplierRepository(database).find_by_id(supplier.id, include=["costs"])
    assert len(with_costs.to_dict()["costs"]) == 3


@pytest.mark.asyncio
async def test_campaign_tree_with_nested_relations(database, company):
    campaign = await CampaignRepository(database).create({"company_id": company.id, "name": "Spring", "type": "PAID"})
    paid = await PaidCampaignRepository(database).create({
        "campaign_id": campaign.id,
        "platform": "search",
        "budget": Decimal("1000.00"),
        "start_date": date(2024, 3, 1),
    })
    await AdSetRepository(database).create({"paid_campaign_id": paid.id, "name": "Brand terms"})

    found = await PaidCampaignRepository(database).find_by_id(paid.id, include=["campaign", "ad_sets"])
    data = found.to_dict()

    assert data["campaign"]["name"] == "Spring"
    assert data["ad_sets"][0]["name"] == "Brand terms"
    assert data["ad_sets"][0]["status"] == "ACTIVE"
    assert data["ad_sets"][0]["ad_contents"] == []


@pytest.mark.asyncio
async def test_metrics_default_to_latest_date_first(database, company):
    campaign = await CampaignRepository(database).create({"company_id": company.id, "name": "Spring", "type": "PAID"})
    paid = await PaidCampaignRepository(database).create({
        "campaign_id": campaign.id,
        "platform": "social",
        "budget": Decimal("500.00"),
        "start_date": date(2024, 3, 1),
    })
    ad_set = await AdSetRepository(database).create({"paid_campaign_id": paid.id, "name": "Lookalikes"})

    content = await AdContentRepository(database).create({
        "ad_set_id": ad_set.id,
        "headline": "Spring sale",
        "body_text": "Everything must go",
        "creative_type": "IMAGE",
        "destination_url": "https://example.com/spring",
        "status": "LIVE",
    })
    metrics = PerformanceMetricRepository(database)
    for day in (3, 1, 2):
        await metrics.create({"ad_content_id": content.id, "metric_date": date(2024, 3, day), "clicks": day})

    listed = await metrics.find_all(filters={"ad_content_id": content.id})

    assert [m.metric_date.day for m in listed] == [3, 2, 1]
    assert [m.clicks for m in await metrics.find_all(filters={"clicks__gt": 1}, order_by="clicks")] == [2, 3]


@pytest.mark.asyncio
async def test_sprint_members(database, sprint, user, other_user):
    repo = MomentumSprintMemberRepository(database)
    await repo.create({"sprint_id": sprint.id, "user_id": user.id, "capacity_hours": 30})
    await repo.create({"sprint_id": sprint.id, "user_id": other_user.id, "capacity_hours": 20})

    members = await repo.find_many_by_sprint(sprint.id, include=["user", "sprint"])

    assert {m.user_id for m in members} == {user.id, other_user.id}
    data = members[0].to_dict()
    assert data["sprint"]["title"] == "Sprint 1"
    assert "goal" not in data["sprint"]
    assert "avatar_url" in data["user"]

    with pytest.raises(PersistenceError):
        await repo.create({"sprint_id": sprint.id, "user_id": user.id})

    assert await repo.find_many_by_sprint("no-sprint") == []


@pytest.mark.asyncio
async def test_board_members(database, board, user):
    repo = MomentumBoardMemberRepository(database)
    await repo.create({"board_id": board.id, "user_id": user.id})

    members = await repo.find_many_by_board(board.id)
    assert len(members) == 1
    assert members[0].is_active is True

    ended = await repo.update(
        {"board_id": board.id, "user_id": user.id},
        {"is_active": False, "ended_at": datetime(2024, 6, 1, tzinfo=timezone.utc)},
    )
    assert ended.is_active is False

    assert await repo.find_many(filters={"board_id": board.id, "is_active": True}) == []


@pytest.mark.asyncio
async def test_leave_includes_employee_and_user(database, user):
    employee = await EmployeeRepository(database).create({
        "user_id": user.id,
        "job_title": "Engineer",
        "department": "R&D",
        "cost_centre": "ENG",
        "start_date": date(2022, 9, 1),
    })
    leaves = LeaveRepository(database)
    leave = await leaves.create({
        "employee_id": employee.id,
        "leave_type": "HOLIDAY",
        "start_date": date(2024, 8, 1),
        "end_date": date(2024, 8, 14),
    })
    assert leave.status == "PENDING"

    found = await leaves.find_by_id(leave.id, include=["employee"])
    data = found.to_dict()

    assert data["employee"]["department"] == "R&D"
    assert data["employee"]["user"]["email"] == "ada@example.com"
    assert "cost_centre" not in data["employee"]

    approved = await leaves.update(leave.id, {"status": "APPROVED"})
    assert approved.status == "APPROVED"
    assert approved.reason is None
