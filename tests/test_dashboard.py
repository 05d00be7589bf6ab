"""
Dashboard service tests, run against the fixed reference data with a
zero-latency transport and a pinned "today".
"""
import asyncio
from datetime import date, datetime

import pytest

from config import APPROVALS_KEY, APPROVALS_PREVIOUS_COUNT_KEY, PROJECTS_KEY
from controllers import dashboard_controller as dc
from core.date_ranges import DateRangePreset, preset_range, resolve_range
from core.mock_transport import MockTransport, TransientServiceError, instant_transport
from database import MemoryKeyValueStore
from models.dashboard import DateRange

TODAY = date(2026, 1, 10)
JANUARY = DateRange(start=datetime(2026, 1, 1), end=datetime(2026, 1, 31, 23, 59, 59))


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def transport():
    return instant_transport()


def pending(count):
    return [{"id": i, "status": "pending"} for i in range(count)]


# ═══════════════════════════════════════════════════════════════
# 1. DATE RANGES
# ═══════════════════════════════════════════════════════════════
class TestDateRanges:

    def test_this_month(self):
        r = preset_range(DateRangePreset.THIS_MONTH, TODAY)
        assert r.start == datetime(2026, 1, 1)
        assert r.end.date() == date(2026, 1, 31)

    def test_this_week_starts_monday(self):
        r = preset_range(DateRangePreset.THIS_WEEK, TODAY)
        assert r.start.date() == date(2026, 1, 5)
        assert r.end.date() == date(2026, 1, 11)

    def test_last_month_crosses_year(self):
        r = preset_range(DateRangePreset.LAST_MONTH, TODAY)
        assert r.start.date() == date(2025, 12, 1)
        assert r.end.date() == date(2025, 12, 31)

    def test_custom_without_bounds_falls_back_to_this_month(self):
        assert preset_range(DateRangePreset.CUSTOM, TODAY) == preset_range(DateRangePreset.THIS_MONTH, TODAY)

    def test_explicit_bounds_win(self):
        r = resolve_range(DateRangePreset.TODAY, date(2025, 12, 1), date(2026, 1, 31), TODAY)
        assert r.start.date() == date(2025, 12, 1)

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError):
            resolve_range(start=date(2026, 2, 1), end=date(2026, 1, 1))


# ═══════════════════════════════════════════════════════════════
# 2. REVENUE AND STATS
# ═══════════════════════════════════════════════════════════════
class TestRevenue:

    def test_revenue_sums_paid_invoices_in_range(self):
        assert dc.calculate_revenue(JANUARY) == 12500

    def test_previous_period_has_equal_length(self):
        assert dc.calculate_previous_period_revenue(JANUARY) == 18750 + 9800

    def test_monthly_points_with_comparison(self, transport):
        span = DateRange(start=datetime(2025, 12, 1), end=datetime(2026, 1, 31))
        points = run(dc.get_revenue_data(transport, span, compare_period=True))
        assert [p.month for p in points] == ["Dec", "Jan"]
        assert points[1].revenue == 12500
        assert points[1].previous_revenue == 28550

    def test_points_without_comparison(self, transport):
        points = run(dc.get_revenue_data(transport, JANUARY))
        assert points[0].previous_revenue is None

    def test_round_half_up(self):
        assert dc.round_half_up(2.25) == 2.3
        assert dc.round_half_up(-56.2172) == -56.2


class TestDashboardStats:

    def test_reference_data(self, store, transport):
        stats = run(dc.get_dashboard_stats(store, transport, JANUARY))
        assert stats.monthly_revenue == 12500
        assert stats.revenue_change == -56.2
        assert stats.active_clients == 4
        assert stats.active_projects == 4
        assert stats.pending_approvals == 0
        assert stats.approvals_change == 0

    def test_stored_projects_replace_defaults(self, store, transport):
        run(store.set(PROJECTS_KEY, [{"id": 1, "status": "review"}]))
        assert run(dc.get_dashboard_stats(store, transport, JANUARY)).active_projects == 1

    def test_approvals_change_tracks_previous_count(self, store, transport):
        run(store.set(APPROVALS_KEY, pending(2)))
        first = run(dc.get_dashboard_stats(store, transport, JANUARY))
        assert first.approvals_change == 0
        assert run(store.get(APPROVALS_PREVIOUS_COUNT_KEY)) == "2"

        run(store.set(APPROVALS_KEY, pending(3)))
        second = run(dc.get_dashboard_stats(store, transport, JANUARY))
        assert second.approvals_change == 1
        assert run(store.get(APPROVALS_PREVIOUS_COUNT_KEY)) == "3"

    def test_nothing_pending_resets_baseline(self, store, transport):
        run(store.set(APPROVALS_PREVIOUS_COUNT_KEY, "5"))
        stats = run(dc.get_dashboard_stats(store, transport, JANUARY))
        assert stats.approvals_change == 0
        assert run(store.get(APPROVALS_PREVIOUS_COUNT_KEY)) == "0"

    def test_unreadable_baseline_counts_as_zero_change(self, store, transport):
        run(store.set(APPROVALS_KEY, pending(1)))
        run(store.set(APPROVALS_PREVIOUS_COUNT_KEY, "lots"))
        assert run(dc.get_dashboard_stats(store, transport, JANUARY)).approvals_change == 0

    def test_transient_failure(self, store):
        failing = MockTransport(failure_rate=1.0, delay_scale=0.0)
        with pytest.raises(TransientServiceError) as exc:
            run(dc.get_dashboard_stats(store, failing, JANUARY))
        assert exc.value.message == "Failed to fetch dashboard stats"

    def test_failure_rate_bounds(self):
        with pytest.raises(ValueError):
            MockTransport(failure_rate=1.5)


# ═══════════════════════════════════════════════════════════════
# 3. LISTS
# ═══════════════════════════════════════════════════════════════
class TestDashboardLists:

    def test_recent_clients(self, transport):
        clients = run(dc.get_recent_clients(transport))
        assert len(clients) == 4
        assert clients[0].revenue == "$124,500"
        assert clients[0].last_activity == "Just now"

    def test_active_projects_format_due_dates(self, store, transport):
        projects = run(dc.get_active_projects(store, transport))
        assert [p["id"] for p in projects] == [1, 2, 3, 6]
        assert projects[0]["due_date"] == "Jan 15, 2026"

    def test_campaign_activities_carry_client_ids(self, transport):
        activities = run(dc.get_campaign_activities(transport))
        assert len(activities) == 5
        assert activities[0].client_id == "client-1"

    def test_upcoming_deadlines(self, store, transport):
        items = run(dc.get_upcoming_deadlines(store, transport, 7, today=TODAY))
        assert [i.days_until_due for i in items] == [-31, -21, -13, 5, 5]
        assert items[3].type == "project" and items[3].title == "Q1 Brand Campaign"
        overdue = {i.title: i.is_overdue for i in items if i.type == "invoice"}
        assert overdue == {"INV-2025-087": False, "INV-2025-088": False, "INV-2025-089": True, "INV-2026-001": False}

    def test_overdue_items(self, store, transport):
        items = run(dc.get_overdue_items(store, transport, today=TODAY))
        assert [(i.type, i.title) for i in items] == [("project", "Website Redesign"), ("invoice", "INV-2025-089")]
        assert items[0].days_until_due == 2

    def test_due_today_counts_as_overdue(self, store, transport):
        items = run(dc.get_overdue_items(store, transport, today=date(2026, 1, 8)))
        assert "Website Redesign" in [i.title for i in items]

    def test_unreadable_project_date_is_skipped(self, store, transport):
        run(store.set(PROJECTS_KEY, [{"id": 9, "name": "Broken", "client": "X", "status": "in-progress", "due_date": "soon"}]))
        items = run(dc.get_overdue_items(store, transport, today=TODAY))
        assert "Broken" not in [i.title for i in items]

    def test_recent_invoices_newest_first(self, transport):
        invoices = run(dc.get_recent_invoices(transport))
        assert [i.id for i in invoices] == ["INV-2026-003", "INV-2026-002", "INV-2026-001", "INV-2025-089", "INV-2025-088"]
        assert invoices[0].due_date == "Jan 25, 2026"
        assert invoices[2].paid_date == "Jan 12, 2026"

    def test_team_workload(self, store, transport):
        members = {m.initials: m for m in run(dc.get_team_workload(store, transport))}
        assert members["AS"].project_count == 4
        assert members["AS"].utilization == 80.0
        assert members["RB"].name == "Rachel Brooks"

    def test_notifications(self, store, transport):
        notes = run(dc.get_notifications(store, transport, today=TODAY))
        assert [n.type for n in notes] == ["invoice", "deadline", "campaign"]
        assert notes[0].message == "1 invoice(s) are overdue"

    def test_pending_approval_notification(self, store, transport):
        run(store.set(APPROVALS_KEY, pending(1)))
        notes = run(dc.get_notifications(store, transport, today=TODAY))
        assert notes[0].message == "1 item is waiting for your approval"
