"""RSVP API routes."""
import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.database import Database, get_database, get_db
from app.schemas.rsvp import RsvpOut, StatsOut
from app.services import rsvp_service
from app.services.rsvp_service import SchemaNotProvisionedError

logger = logging.getLogger(__name__)
router = APIRouter()


async def read_json_body(request: Request) -> Any:
    """Decoded request body.

    400 if it is not valid JSON, or is a falsy scalar (``null``, ``false``,
    ``0``, ``""``). Empty objects and arrays pass through.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not body and not isinstance(body, (dict, list)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid JSON")
    return body


# db is declared before body so an unconfigured database answers 503 first
@router.post("", response_model=RsvpOut, status_code=status.HTTP_201_CREATED)
def create_rsvp(db: Session = Depends(get_db), body: Any = Depends(read_json_body)):
    """Record an RSVP with its accompanying guests."""
    try:
        rsvp = rsvp_service.submit_rsvp(db, body)
        return RsvpOut.model_validate(rsvp)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to save RSVP")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to save RSVP",
        )


@router.get("/stats", response_model=StatsOut, response_model_exclude_none=True)
def get_stats(response: Response, database: Optional[Database] = Depends(get_database)):
    """Aggregate RSVP and guest counts.

    Storage that is missing or not yet migrated is reported as
    ``configured: false`` with zero counts instead of an error.
    """
    if database is None:
        return StatsOut(configured=False)

    try:
        with database.session() as db:
            rsvps = rsvp_service.count_rsvps(db)
            guests_count = rsvp_service.count_guests(db)
    except SchemaNotProvisionedError as exc:
        logger.warning("RSVP tables missing, reporting as unconfigured: %s", exc)
        return StatsOut(configured=False)
    except Exception:
        logger.exception("Failed to fetch RSVP stats")
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return StatsOut(configured=True, error="stats_failed")

    return StatsOut(rsvps=rsvps, guests_count=guests_count, configured=True)
