"""Health check endpoints."""

from fastapi import APIRouter, Request
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check application health status.

    Returns:
        Health status including database connectivity.
    """
    settings = request.app.state.settings
    database = getattr(request.app.state, "database", None)

    db_status = "healthy"
    if database is None:
        db_status = "not initialized"
    else:
        try:
            async with database.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except RuntimeError:
            db_status = "not initialized"
        except (SQLAlchemyError, OSError):
            db_status = "error"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        version=settings.app_version,
        database=db_status,
    )
