from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from typing import List, Literal, Optional
from datetime import date
from models.billing import Invoice
from models.dashboard import (
    DateRange, DashboardStats, DeadlineItem, TeamMember, RevenuePoint, RecentClient, CampaignActivity,
)
from core.auth import get_store, get_transport, require_onboarded_session
from core.date_ranges import DateRangePreset, resolve_range
from core.mock_transport import MockTransport
from core.session import Session
from controllers import dashboard_controller, reports_controller
from database import KeyValueStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def date_range_query(preset: DateRangePreset = DateRangePreset.THIS_MONTH, start: Optional[date] = None,
                     end: Optional[date] = None) -> DateRange:
    try:
        return resolve_range(preset, start, end)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Range end must not be before its start")


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(date_range: DateRange = Depends(date_range_query), store: KeyValueStore = Depends(get_store), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return await dashboard_controller.get_dashboard_stats(store, transport, date_range)


@router.get("/recent-clients", response_model=List[RecentClient])
async def get_recent_clients(limit: int = 4, transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return session.visible(await dashboard_controller.get_recent_clients(transport, limit), key="id")


@router.get("/active-projects")
async def get_active_projects(limit: int = 4, store: KeyValueStore = Depends(get_store), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return session.visible(await dashboard_controller.get_active_projects(store, transport, limit))


@router.get("/campaign-activities", response_model=List[CampaignActivity])
async def get_campaign_activities(limit: int = 5, transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return session.visible(await dashboard_controller.get_campaign_activities(transport, limit))


@router.get("/revenue", response_model=List[RevenuePoint])
async def get_revenue_data(compare_period: bool = False, date_range: DateRange = Depends(date_range_query), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return await dashboard_controller.get_revenue_data(transport, date_range, compare_period)


@router.get("/revenue/export")
async def export_revenue(format: Literal["csv", "excel"] = "csv", compare_period: bool = False, date_range: DateRange = Depends(date_range_query), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    points = await dashboard_controller.get_revenue_data(transport, date_range, compare_period)
    return reports_controller.export_revenue(points, format)


@router.get("/deadlines", response_model=List[DeadlineItem])
async def get_upcoming_deadlines(days: int = 7, store: KeyValueStore = Depends(get_store), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return session.visible(await dashboard_controller.get_upcoming_deadlines(store, transport, days))


@router.get("/overdue", response_model=List[DeadlineItem])
async def get_overdue_items(store: KeyValueStore = Depends(get_store), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return session.visible(await dashboard_controller.get_overdue_items(store, transport))


@router.get("/recent-invoices", response_model=List[Invoice])
async def get_recent_invoices(limit: int = 5, transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return session.visible(await dashboard_controller.get_recent_invoices(transport, limit))


@router.get("/team-workload", response_model=List[TeamMember])
async def get_team_workload(store: KeyValueStore = Depends(get_store), transport: MockTransport = Depends(get_transport), session: Session = Depends(require_onboarded_session)):
    return await dashboard_controller.get_team_workload(store, transport)
