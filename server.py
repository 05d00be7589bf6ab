from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
from datetime import datetime, timezone
from typing import Optional

# Load config first (triggers dotenv)
from config import CORS_ORIGINS, DEMO_MODE, MOCK_SEED
from database import KeyValueStore, create_store
from core.content_generator import ContentGenerator
from core.mock_transport import MockTransport, TransientServiceError
from seed import seed_demo_users

# Import all routers
from routes.auth import router as auth_router
from routes.onboarding import router as onboarding_router
from routes.navigation import router as navigation_router
from routes.dashboard import router as dashboard_router
from routes.notifications import router as notifications_router
from routes.clients import router as clients_router
from routes.projects import router as projects_router
from routes.campaigns import router as campaigns_router
from routes.blogs import router as blogs_router
from routes.messages import router as messages_router
from routes.approvals import router as approvals_router
from routes.analytics import router as analytics_router
from routes.users import router as users_router
from routes.billing import router as billing_router
from routes.settings import router as settings_router

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

API_PREFIX = "/api"
ROUTERS = (
    auth_router, onboarding_router, navigation_router, dashboard_router, notifications_router,
    clients_router, projects_router, campaigns_router, blogs_router, messages_router,
    approvals_router, analytics_router, users_router, billing_router, settings_router,
)


def create_app(store: Optional[KeyValueStore] = None, transport: Optional[MockTransport] = None,
               demo_mode: Optional[bool] = None, generator: Optional[ContentGenerator] = None) -> FastAPI:
    app = FastAPI(title="AgencyHub API")
    app.state.store = store or create_store()
    app.state.transport = transport or MockTransport()
    app.state.demo_mode = DEMO_MODE if demo_mode is None else demo_mode
    app.state.generator = generator or ContentGenerator(MOCK_SEED)

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers under /api prefix
    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    @app.exception_handler(TransientServiceError)
    async def transient_error_handler(request: Request, exc: TransientServiceError):
        return JSONResponse(status_code=503, content={"detail": exc.message, "transient": True})

    # ── Root / Health ──────────────────────────────────────

    @app.get("/api/")
    async def root():
        return {"message": "AgencyHub API", "version": "1.0.0"}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    # ── Startup / Shutdown ─────────────────────────────────

    @app.on_event("startup")
    async def seed_demo_accounts():
        if app.state.demo_mode:
            await seed_demo_users(app.state.store)
            logger.info("Demo mode is on: role switching enabled")

    @app.on_event("shutdown")
    async def close_store():
        app.state.store.close()

    return app


app = create_app()
