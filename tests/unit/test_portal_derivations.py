"""Unit tests for project filtering, finance summaries and the activity feed."""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from src.buildor.models.base import utc_now
from src.buildor.services.portal_service import (
    ACTIVITY_LIMIT,
    derive_activity,
    filter_projects,
    flatten_member,
    summarize_invoices,
)
from tests.factories import (
    ClientMemberFactory,
    InvoiceFactory,
    ProfileFactory,
    ProjectFactory,
)

pytestmark = pytest.mark.unit

CLIENT_ID = uuid4()


def _projects(*statuses: str):
    return [ProjectFactory.build(client_id=CLIENT_ID, status=s) for s in statuses]


class TestFilterProjects:
    def test_all_hides_archived(self):
        projects = _projects("active", "upcoming", "archived", "completed", "paused")

        result = filter_projects(projects, "all")

        assert [p.status for p in result] == ["active", "upcoming", "completed", "paused"]

    @pytest.mark.parametrize("status", ["active", "upcoming", "archived"])
    def test_status_filter_matches_exactly(self, status):
        projects = _projects("active", "upcoming", "archived", "active")

        result = filter_projects(projects, status)

        assert result
        assert all(p.status == status for p in result)

    def test_preserves_order(self):
        projects = _projects("active", "active", "active")

        assert filter_projects(projects, "active") == projects


def _invoice(status: str, amount: str):
    return InvoiceFactory.build(client_id=CLIENT_ID, status=status, amount_total=Decimal(amount))


class TestSummarizeInvoices:
    def test_totals(self):
        invoices = [
            _invoice("paid", "500.00"),
            _invoice("pending", "1200.50"),
            _invoice("overdue", "300.00"),
        ]

        summary = summarize_invoices(invoices)

        assert summary.total == Decimal("2000.50")
        assert summary.total_paid == Decimal("500.00")
        assert summary.outstanding == Decimal("1500.50")
        assert summary.total == summary.total_paid + summary.outstanding

    def test_currency_comes_from_first_invoice(self):
        invoices = [
            InvoiceFactory.build(client_id=CLIENT_ID, currency="EUR"),
            InvoiceFactory.build(client_id=CLIENT_ID, currency="USD"),
        ]

        assert summarize_invoices(invoices).currency == "EUR"

    def test_empty_defaults_to_usd_and_zero(self):
        summary = summarize_invoices([])

        assert summary.currency == "USD"
        assert summary.total == 0
        assert summary.outstanding == 0


class TestFlattenMember:
    def test_with_profile(self):
        member = ClientMemberFactory.build(client_id=CLIENT_ID, role="contributor")
        profile = ProfileFactory.build(
            id=member.user_id, full_name="Dana", email="dana@example.com"
        )

        flat = flatten_member(member, profile)

        assert flat.user_id == member.user_id
        assert flat.role == "contributor"
        assert flat.full_name == "Dana"
        assert flat.email == "dana@example.com"

    def test_without_profile(self):
        member = ClientMemberFactory.build(client_id=CLIENT_ID)

        flat = flatten_member(member, None)

        assert flat.full_name is None
        assert flat.email is None
        assert flat.avatar_url is None


class TestDeriveActivity:
    def test_item_shapes(self):
        project = ProjectFactory.build(
            client_id=CLIENT_ID, name="Site", status="active", progress=75
        )
        paid = InvoiceFactory.build(
            client_id=CLIENT_ID,
            invoice_number="INV-1",
            status="paid",
            currency="USD",
            amount_total=Decimal("1500"),
        )
        pending = InvoiceFactory.build(
            client_id=CLIENT_ID, invoice_number="INV-2", status="pending"
        )
        member = flatten_member(ClientMemberFactory.build(client_id=CLIENT_ID, role="owner"), None)

        items = {item.id: item for item in derive_activity([project], [paid, pending], [member])}

        project_item = items[f"proj-{project.id}"]
        assert project_item.type == "project_update"
        assert project_item.label == "Site"
        assert project_item.detail == "active · 75% complete"

        paid_item = items[f"inv-{paid.id}"]
        assert paid_item.type == "invoice_paid"
        assert paid_item.label == "Invoice INV-1"
        assert paid_item.detail == "USD 1500.00 · paid"

        assert items[f"inv-{pending.id}"].type == "invoice_created"

        member_item = items[f"mem-{member.id}"]
        assert member_item.type == "member_joined"
        assert member_item.label == "Team member"
        assert member_item.detail == "joined as owner"

    def test_member_label_prefers_name_then_email(self):
        base = ClientMemberFactory.build(client_id=CLIENT_ID)
        named = flatten_member(base, ProfileFactory.build(full_name="Sam", email="sam@example.com"))
        anonymous = ProfileFactory.build(full_name=None, email="sam@example.com")
        emailed = flatten_member(base, anonymous)

        assert derive_activity([], [], [named])[0].label == "Sam"
        assert derive_activity([], [], [emailed])[0].label == "sam@example.com"

    def test_takes_at_most_five_five_three_and_returns_ten(self):
        now = utc_now()
        projects = [
            ProjectFactory.build(client_id=CLIENT_ID, updated_at=now - timedelta(minutes=i))
            for i in range(8)
        ]
        invoices = [
            InvoiceFactory.build(client_id=CLIENT_ID, created_at=now - timedelta(minutes=i))
            for i in range(8)
        ]
        members = [
            flatten_member(
                ClientMemberFactory.build(
                    client_id=CLIENT_ID, joined_at=now - timedelta(minutes=i)
                ),
                None,
            )
            for i in range(5)
        ]

        items = derive_activity(projects, invoices, members)

        assert len(items) == ACTIVITY_LIMIT
        ids = {item.id for item in items}
        assert not ids & {f"proj-{p.id}" for p in projects[5:]}
        assert not ids & {f"inv-{i.id}" for i in invoices[5:]}
        assert not ids & {f"mem-{m.id}" for m in members[3:]}

    def test_sorted_newest_first(self):
        now = utc_now()
        old_project = ProjectFactory.build(client_id=CLIENT_ID, updated_at=now - timedelta(days=3))
        new_invoice = InvoiceFactory.build(client_id=CLIENT_ID, created_at=now)
        mid_member = flatten_member(
            ClientMemberFactory.build(client_id=CLIENT_ID, joined_at=now - timedelta(days=1)),
            None,
        )

        items = derive_activity([old_project], [new_invoice], [mid_member])

        assert [item.type for item in items] == [
            "invoice_created",
            "member_joined",
            "project_update",
        ]
        timestamps = [item.timestamp for item in items]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_empty_inputs(self):
        assert derive_activity([], [], []) == []
