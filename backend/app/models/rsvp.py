"""Rsvp and RsvpGuest ORM models."""
import uuid
from sqlalchemy import Column, String, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base


class Rsvp(Base):
    __tablename__ = "rsvps"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(120), nullable=False)
    phone = Column(String(40), nullable=True)
    guest_names = Column(JSON, nullable=False, default=list)  # mirrors guests[].name
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    guests = relationship(
        "RsvpGuest",
        back_populates="rsvp",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RsvpGuest.position",
    )


class RsvpGuest(Base):
    __tablename__ = "rsvp_guests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    rsvp_id = Column(String(36), ForeignKey("rsvps.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    rsvp = relationship("Rsvp", back_populates="guests")
