from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from lcl_quote.config import settings
from lcl_quote.dependencies import get_db
from lcl_quote.schemas.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)) -> HealthResponse:
    # The webhook store has no cheap probe; only the database backend is checked
    lead_store_status = "not_checked"
    if settings.lead_store_backend == "database":
        lead_store_status = "healthy"
        try:
            await db.execute(text("SELECT 1"))
        except Exception:
            lead_store_status = "unhealthy"

    overall = "degraded" if lead_store_status == "unhealthy" else "healthy"

    return HealthResponse(
        status=overall,
        lead_store=lead_store_status,
        lead_store_backend=settings.lead_store_backend,
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        version="0.1.0",
    )
