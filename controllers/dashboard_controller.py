import logging
import math
from datetime import date, datetime, timedelta
from typing import List, Optional

from config import PROJECTS_KEY, APPROVALS_KEY, APPROVALS_PREVIOUS_COUNT_KEY
from core.content_generator import CLIENTS, client_id_for
from core.date_ranges import start_of_day, end_of_day, start_of_month, end_of_month, previous_month, next_month
from core.mock_data import DEFAULT_PROJECTS, INVOICES, CAMPAIGN_ACTIVITIES, TEAM_DIRECTORY, TEAM_CAPACITY
from core.mock_transport import MockTransport
from database import KeyValueStore, load_value, save_value
from models.dashboard import (
    DateRange, DashboardStats, DeadlineItem, TeamMember, RevenuePoint,
    RecentClient, CampaignActivity, Notification,
)
from models.billing import Invoice

logger = logging.getLogger(__name__)

ACTIVE_PROJECT_STATUSES = ("in-progress", "review")


# ── Helpers ───────────────────────────────────────────────

def parse_due_date(value: str) -> date:
    """Accept `2026-01-15`, `Jan 15, 2026` or a full ISO timestamp."""
    for fmt in ("%Y-%m-%d", "%b %d, %Y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return datetime.fromisoformat(value).date()


def format_date(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _naive(moment: datetime) -> datetime:
    return moment.replace(tzinfo=None) if moment.tzinfo else moment


def _is_past(day: date, today: date) -> bool:
    # A date is past from its first instant, so "today" already counts
    return day <= today


def _invoice_number(invoice_id: str) -> int:
    return int(invoice_id.split("-")[2])


def calculate_revenue(date_range: DateRange) -> float:
    """Sum of invoices paid inside the range."""
    start, end = _naive(date_range.start), _naive(date_range.end)
    total = 0
    for invoice in INVOICES:
        if not invoice["paid_date"]:
            continue
        paid = datetime.strptime(invoice["paid_date"], "%Y-%m-%d")
        if start <= paid <= end:
            total += invoice["amount"]
    return total


def calculate_previous_period_revenue(date_range: DateRange) -> float:
    """Revenue of the period of equal length ending the day before `start`."""
    start, end = _naive(date_range.start), _naive(date_range.end)
    days = (end - start).days
    previous = DateRange(start=start - timedelta(days=days + 1), end=start - timedelta(days=1))
    return calculate_revenue(previous)


async def load_projects(store: KeyValueStore) -> List[dict]:
    return await load_value(store, PROJECTS_KEY, DEFAULT_PROJECTS)


async def load_approvals(store: KeyValueStore) -> List[dict]:
    return await load_value(store, APPROVALS_KEY, [])


def _project_due_date(project: dict) -> Optional[date]:
    try:
        return parse_due_date(project.get("due_date", ""))
    except ValueError:
        logger.warning("Skipping project %s with unreadable due date %r", project.get("id"), project.get("due_date"))
        return None


# ── Dashboard ─────────────────────────────────────────────

async def get_dashboard_stats(store: KeyValueStore, transport: MockTransport, date_range: DateRange) -> DashboardStats:
    await transport.call(300, 500, "Failed to fetch dashboard stats")

    current_revenue = calculate_revenue(date_range)
    previous_revenue = calculate_previous_period_revenue(date_range)
    revenue_change = ((current_revenue - previous_revenue) / previous_revenue * 100) if previous_revenue > 0 else 0

    active_clients = len([c for c in CLIENTS if c.status == "active"])
    projects = await load_projects(store)
    active_projects = len([p for p in projects if p.get("status") in ACTIVE_PROJECT_STATUSES])
    approvals = await load_approvals(store)
    pending_approvals = len([a for a in approvals if a.get("status") == "pending"])

    # With nothing pending the change is pinned to 0 and the baseline reset
    approvals_change = 0
    if pending_approvals > 0:
        previous_count = await load_value(store, APPROVALS_PREVIOUS_COUNT_KEY)
        if previous_count is not None:
            try:
                approvals_change = pending_approvals - int(previous_count)
            except (TypeError, ValueError):
                approvals_change = 0
        await save_value(store, APPROVALS_PREVIOUS_COUNT_KEY, str(pending_approvals))
    else:
        await save_value(store, APPROVALS_PREVIOUS_COUNT_KEY, "0")

    return DashboardStats(
        monthly_revenue=current_revenue,
        active_clients=active_clients,
        active_projects=active_projects,
        pending_approvals=pending_approvals,
        revenue_change=round_half_up(revenue_change),
        clients_change=3,
        projects_change=5,
        approvals_change=approvals_change,
    )


async def get_recent_clients(transport: MockTransport, limit: int = 4) -> List[RecentClient]:
    await transport.call(200, 300, "Failed to fetch clients")
    return [
        RecentClient(
            id=c.id, name=c.name, email=c.email, status=c.status, projects=c.projects,
            revenue=f"${c.revenue:,.0f}", last_activity="Just now",
        )
        for c in CLIENTS[:limit]
    ]


async def get_active_projects(store: KeyValueStore, transport: MockTransport, limit: int = 4) -> List[dict]:
    await transport.call(250, 350, "Failed to fetch projects")
    projects = await load_projects(store)
    active = [p for p in projects if p.get("status") in ACTIVE_PROJECT_STATUSES][:limit]
    result = []
    for project in active:
        due = _project_due_date(project)
        result.append({**project, "due_date": format_date(due) if due else project.get("due_date")})
    return result


async def get_campaign_activities(transport: MockTransport, limit: int = 5) -> List[CampaignActivity]:
    await transport.call(200, 300, "Failed to fetch activities")
    return [CampaignActivity(**a, client_id=client_id_for(a["client"])) for a in CAMPAIGN_ACTIVITIES[:limit]]


async def get_revenue_data(transport: MockTransport, date_range: DateRange, compare_period: bool = False) -> List[RevenuePoint]:
    await transport.call(300, 400, "Failed to fetch revenue data")
    points = []
    current = start_of_month(_naive(date_range.start).date())
    last = end_of_month(_naive(date_range.end).date())
    while current <= last:
        month = DateRange(start=start_of_day(current), end=end_of_day(end_of_month(current)))
        point = RevenuePoint(month=current.strftime("%b"), revenue=calculate_revenue(month))
        if compare_period:
            prev = previous_month(current)
            point.previous_revenue = calculate_revenue(
                DateRange(start=start_of_day(prev), end=end_of_day(end_of_month(prev)))
            )
        points.append(point)
        current = next_month(current)
    return points


async def get_upcoming_deadlines(store: KeyValueStore, transport: MockTransport, days: int = 7,
                                 today: Optional[date] = None) -> List[DeadlineItem]:
    await transport.call(250, 300, "Failed to fetch deadlines")
    today = today or date.today()
    horizon = today + timedelta(days=days)
    deadlines = []

    for project in await load_projects(store):
        due = _project_due_date(project)
        if due and today <= due <= horizon:
            deadlines.append(DeadlineItem(
                id=project["id"],
                type="project",
                title=project["name"],
                due_date=format_date(due),
                client=project["client"],
                client_id=project.get("client_id"),
                is_overdue=False,
                days_until_due=(due - today).days,
                url="/projects",
            ))

    # Invoices are listed up to the horizon including ones already past due
    for invoice in INVOICES:
        due = parse_due_date(invoice["due_date"])
        if due <= horizon:
            deadlines.append(DeadlineItem(
                id=_invoice_number(invoice["id"]),
                type="invoice",
                title=invoice["id"],
                due_date=format_date(due),
                client=invoice["client"],
                client_id=invoice["client_id"],
                is_overdue=_is_past(due, today) and invoice["status"] != "paid",
                days_until_due=(due - today).days,
                url="/billing",
            ))

    return sorted(deadlines, key=lambda d: d.days_until_due)


async def get_overdue_items(store: KeyValueStore, transport: MockTransport,
                            today: Optional[date] = None) -> List[DeadlineItem]:
    await transport.call(200, 250, "Failed to fetch overdue items")
    today = today or date.today()
    overdue = []

    for project in await load_projects(store):
        due = _project_due_date(project)
        if due and _is_past(due, today) and project.get("status") != "completed":
            overdue.append(DeadlineItem(
                id=project["id"],
                type="project",
                title=project["name"],
                due_date=format_date(due),
                client=project["client"],
                client_id=project.get("client_id"),
                is_overdue=True,
                days_until_due=(today - due).days,
                url="/projects",
            ))

    for invoice in INVOICES:
        due = parse_due_date(invoice["due_date"])
        if _is_past(due, today) and invoice["status"] != "paid":
            overdue.append(DeadlineItem(
                id=_invoice_number(invoice["id"]),
                type="invoice",
                title=invoice["id"],
                due_date=format_date(due),
                client=invoice["client"],
                client_id=invoice["client_id"],
                is_overdue=True,
                days_until_due=(today - due).days,
                url="/billing",
            ))

    return overdue


async def get_recent_invoices(transport: MockTransport, limit: int = 5) -> List[Invoice]:
    await transport.call(200, 300, "Failed to fetch invoices")
    ordered = sorted(INVOICES, key=lambda i: parse_due_date(i["due_date"]), reverse=True)
    return [
        Invoice(**{
            **invoice,
            "due_date": format_date(parse_due_date(invoice["due_date"])),
            "paid_date": format_date(parse_due_date(invoice["paid_date"])) if invoice["paid_date"] else None,
        })
        for invoice in ordered[:limit]
    ]


async def get_team_workload(store: KeyValueStore, transport: MockTransport) -> List[TeamMember]:
    await transport.call(250, 300, "Failed to fetch team workload")
    counts = {initials: 0 for initials in TEAM_DIRECTORY}
    for project in await load_projects(store):
        for member in project.get("team") or []:
            if member in counts:
                counts[member] += 1
    return [
        TeamMember(
            id=f"member-{index}",
            name=TEAM_DIRECTORY[initials],
            initials=initials,
            project_count=count,
            capacity=TEAM_CAPACITY,
            utilization=count / TEAM_CAPACITY * 100,
        )
        for index, (initials, count) in enumerate(counts.items(), start=1)
    ]


async def get_notifications(store: KeyValueStore, transport: MockTransport,
                            today: Optional[date] = None) -> List[Notification]:
    await transport.call(200, 300, "Failed to fetch notifications")
    today = today or date.today()
    notifications = []

    approvals = await load_approvals(store)
    pending = len([a for a in approvals if a.get("status") == "pending"])
    if pending > 0:
        noun, verb = ("item", "is") if pending == 1 else ("items", "are")
        notifications.append(Notification(
            id=1, type="approval", title="Content Pending Review",
            message=f"{pending} {noun} {verb} waiting for your approval",
            timestamp="2 hours ago", read=False, action_url="/approvals",
        ))

    overdue_invoices = [
        i for i in INVOICES
        if _is_past(parse_due_date(i["due_date"]), today) and i["status"] != "paid"
    ]
    if overdue_invoices:
        notifications.append(Notification(
            id=2, type="invoice", title="Overdue Invoices",
            message=f"{len(overdue_invoices)} invoice(s) are overdue",
            timestamp="1 day ago", read=False, action_url="/billing",
        ))

    notifications.append(Notification(
        id=3, type="deadline", title="Deadlines Approaching",
        message="2 projects have deadlines in the next 3 days",
        timestamp="3 hours ago", read=True, action_url="/projects",
    ))
    notifications.append(Notification(
        id=4, type="campaign", title="Campaign Published",
        message="LinkedIn campaign for Atlas Media Group is now live",
        timestamp="5 hours ago", read=False, action_url="/campaigns",
    ))
    return notifications
