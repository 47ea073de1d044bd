"""Input normalization for RSVP submissions.

Request bodies are untrusted JSON, so every field may be missing or of the
wrong type. These helpers never raise: anything unusable becomes ``None``
(or an empty list) and the caller decides whether that is an error.
"""
from typing import Any, Optional

NAME_MAX_LENGTH = 120
PHONE_MAX_LENGTH = 40
GUEST_NAME_MAX_LENGTH = 120
MAX_GUESTS = 20


def required_string(value: Any, max_len: int) -> Optional[str]:
    """Trimmed ``value`` if it is a non-empty string of at most ``max_len`` chars."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed or len(trimmed) > max_len:
        return None
    return trimmed


def optional_string(value: Any, max_len: int) -> Optional[str]:
    """Like ``required_string``, but for fields the caller may leave out.

    Malformed or oversized input is dropped (returns None) rather than
    rejected, the same as if the field had not been sent.
    """
    if value is None or value == "":
        return None
    return required_string(value, max_len)


def guest_list(value: Any) -> list[str]:
    """Valid guest names from ``value``, in input order, capped at MAX_GUESTS."""
    if not isinstance(value, list):
        return []
    names = [required_string(item, GUEST_NAME_MAX_LENGTH) for item in value]
    return [name for name in names if name is not None][:MAX_GUESTS]
