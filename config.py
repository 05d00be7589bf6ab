from pathlib import Path
from dotenv import load_dotenv
import os

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


# JWT Config
JWT_SECRET = os.environ.get('JWT_SECRET', 'agencyhub_secret_key')
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 24

# Demo mode enables the role switcher and seeds demo accounts on startup
DEMO_MODE = _env_flag('DEMO_MODE')

# Storage
STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'memory')
MONGO_URL = os.environ.get('MONGO_URL', 'mongodb://localhost:27017')
DB_NAME = os.environ.get('DB_NAME', 'agencyhub')

# Mock services
MOCK_SEED = int(os.environ.get('MOCK_SEED', '2026'))
MOCK_FAILURE_RATE = float(os.environ.get('MOCK_FAILURE_RATE', '0.05'))
MOCK_DELAY_SCALE = float(os.environ.get('MOCK_DELAY_SCALE', '1.0'))

# Auth rules
MIN_PASSWORD_LENGTH = 6

# SPA routes used as redirect targets
LOGIN_ROUTE = "/login"
ONBOARDING_ROUTE = "/onboarding"
DEFAULT_REDIRECT = "/"

CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

# Storage keys (browser localStorage layout of the portal)
USERS_KEY = "agency_users"
PROJECTS_KEY = "agency_projects_data"
APPROVALS_KEY = "agency_approvals_data"
APPROVALS_PREVIOUS_COUNT_KEY = "agency_approvals_previous_count"
AGENCY_DETAILS_KEY = "agency_details"


def content_key(kind: str) -> str:
    return f"agency_content_{kind}"


def team_members_key(user_id: str) -> str:
    return f"team_members_{user_id}"


def clients_key(user_id: str) -> str:
    return f"clients_{user_id}"
