"""Health check: is the in-memory store reachable, and does it hold the full schema?"""

import logging

from fastapi import APIRouter

from app.api.auth import SessionDep
from app.core.config import settings
from app.core.database import store_status
from app.schemas.health import HealthResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=HealthResponse)
def get_health(db: SessionDep) -> HealthResponse:
    connected, counts, missing = store_status(db)
    if missing:
        logger.warning("Store is missing tables: %s", ", ".join(missing))
    return HealthResponse(
        status="ok" if connected and not missing else "degraded",
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        tables=counts,
        missing_tables=missing,
    )
