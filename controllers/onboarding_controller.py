import logging

from config import USERS_KEY, team_members_key, clients_key
from controllers.auth_controller import issue_token
from controllers.settings_controller import get_agency_details, save_agency_details
from core.session import Session
from database import KeyValueStore, load_value, save_value
from models.auth import Token
from models.onboarding import OnboardingComplete, OnboardingStatus

logger = logging.getLogger(__name__)


async def get_status(store: KeyValueStore, session: Session) -> OnboardingStatus:
    user = session.user
    return OnboardingStatus(
        has_completed_onboarding=user.has_completed_onboarding,
        agency_details=await get_agency_details(store),
        team_members=await load_value(store, team_members_key(user.id), []),
        clients=await load_value(store, clients_key(user.id), []),
    )


async def complete_onboarding(store: KeyValueStore, session: Session, data: OnboardingComplete) -> Token:
    user = session.user
    await save_agency_details(store, data.agency_details)

    # Team members and clients are optional steps
    if data.team_members:
        await save_value(store, team_members_key(user.id), [m.model_dump(mode="json") for m in data.team_members])
    if data.clients:
        await save_value(store, clients_key(user.id), [c.model_dump(mode="json") for c in data.clients])

    users = await load_value(store, USERS_KEY, [])
    for doc in users:
        if doc.get("id") == user.id:
            doc["has_completed_onboarding"] = True
    await save_value(store, USERS_KEY, users)

    updated = user.model_copy(update={"has_completed_onboarding": True})
    session.set_user(updated)
    logger.info("Onboarding completed for %s (%d team members, %d clients)",
                user.email, len(data.team_members), len(data.clients))
    return issue_token(updated)
