"""ORM models — importing this package registers every table on Base.metadata."""
from app.models.rsvp import Rsvp, RsvpGuest  # noqa: F401
