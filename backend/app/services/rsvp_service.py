"""RSVP service — submission and aggregate counts.

Responsibilities:
- Validate a raw submission body (name required, phone and guests lenient)
- Persist an RSVP and its guests in one transaction
- Count RSVPs and guests, distinguishing "table does not exist" from other failures
"""
import logging
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from app.models.rsvp import Rsvp, RsvpGuest
from app.schemas.rsvp import RsvpCreate

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for "relation does not exist"
UNDEFINED_TABLE = "42P01"


class SchemaNotProvisionedError(RuntimeError):
    """The RSVP tables have not been created yet (no migration has run)."""


def is_missing_table_error(exc: DBAPIError) -> bool:
    """True if the driver reports that a queried table does not exist.

    Relies on driver-specific codes: psycopg2 exposes ``pgcode``, psycopg 3
    ``sqlstate``, and SQLite only has the message text.
    """
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNDEFINED_TABLE:
        return True
    return "no such table" in str(orig)


def _build_guests(rsvp: Rsvp, guest_names: list[str]) -> list[RsvpGuest]:
    return [
        RsvpGuest(rsvp_id=rsvp.id, name=guest_name, position=position)
        for position, guest_name in enumerate(guest_names)
    ]


def create_rsvp_with_guests(
    db: Session,
    name: str,
    phone: Optional[str],
    guest_names: list[str],
) -> Rsvp:
    """Insert one RSVP plus one guest row per name, atomically.

    On any failure the transaction is rolled back and the error re-raised,
    so an RSVP is never visible without its guests.
    """
    rsvp = Rsvp(name=name, phone=phone, guest_names=list(guest_names))
    try:
        db.add(rsvp)
        db.flush()
        if guest_names:
            db.add_all(_build_guests(rsvp, guest_names))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(rsvp)
    logger.info("Created RSVP %s with %d guest(s)", rsvp.id, len(guest_names))
    return rsvp


def submit_rsvp(db: Session, body: Any) -> Rsvp:
    """Validate a decoded JSON body and store it.

    Raises HTTPException(400) when ``name`` is missing or invalid; nothing is
    written in that case. A body that is not a JSON object has no fields.
    """
    payload = RsvpCreate.model_validate(body if isinstance(body, dict) else {})
    if payload.name is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name is required")
    return create_rsvp_with_guests(
        db, name=payload.name, phone=payload.phone, guest_names=payload.guests,
    )


def _count(db: Session, column) -> int:
    try:
        return db.query(func.count(column)).scalar() or 0
    except DBAPIError as exc:
        if is_missing_table_error(exc):
            raise SchemaNotProvisionedError(str(exc.orig)) from exc
        raise


def count_rsvps(db: Session) -> int:
    return _count(db, Rsvp.id)


def count_guests(db: Session) -> int:
    return _count(db, RsvpGuest.id)
