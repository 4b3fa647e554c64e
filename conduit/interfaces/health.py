"""
Health check router.

Liveness/readiness endpoint. Reports the installed package version and
whether the content store answers a trivial query.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from conduit import __version__
from conduit.interfaces.content.dependencies import get_session
from conduit.interfaces.content.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns status, package version and store reachability.",
)
def health_check(session: Session = Depends(get_session)) -> HealthResponse:
    """Return "ok" when the store answers, "degraded" otherwise."""
    try:
        session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        logger.exception("Content store health check failed")
        database = "unavailable"
    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        version=__version__,
        database=database,
    )
