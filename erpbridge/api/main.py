"""FastAPI application entry point."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routes import events, plan
from .. import __version__
from ..config import Settings
from ..errors import BridgeError, NotFoundError, ValidationError
from ..events.progress_bus import ProgressBus, progress_bus
from ..migration.planner import PlanStore

logger = logging.getLogger(__name__)


def _status_for(error: BridgeError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    return 500


async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status, content=exc.to_dict())


def create_app(
    bus: Optional[ProgressBus] = None,
    plan_store: Optional[PlanStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        bus: Progress bus to expose; by default the shared one, resized to
            ``settings.event_history_capacity``
        plan_store: Plan storage, a fresh one by default
        settings: Runtime settings, read from the environment by default
    """
    settings = settings or Settings.from_env()
    app = FastAPI(
        title="ERP Bridge API",
        description="Progress events and migration planning for ERP migrations",
        version=__version__,
    )
    if bus is None:
        bus = progress_bus
        bus.resize(settings.event_history_capacity)
    app.state.progress_bus = bus
    app.state.plan_store = plan_store or PlanStore()

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BridgeError, bridge_error_handler)

    # Include routers
    app.include_router(events.router, prefix="/api/events", tags=["events"])
    app.include_router(plan.router, prefix="/api/migration", tags=["migration"])

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "sseClients": app.state.progress_bus.client_count,
        }

    return app


app = create_app()
