"""
Input normalization shared by the services.
"""
from __future__ import annotations

from datetime import date, time
from typing import Any

from turfup.errors import ValidationError
from turfup.models import MAX_PLAYERS_NEEDED, MIN_PLAYERS_NEEDED


def clean_text(value: Any) -> str | None:
    """Strip strings; blank or non-string becomes None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_players_needed(value: Any) -> int:
    """Accept an int or an integer string; enforce MIN..MAX."""
    if isinstance(value, bool):
        raise ValidationError("playersNeeded must be a whole number")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError("playersNeeded must be a whole number")
    if not isinstance(value, int):
        raise ValidationError("playersNeeded must be a whole number")
    if not MIN_PLAYERS_NEEDED <= value <= MAX_PLAYERS_NEEDED:
        raise ValidationError(
            f"playersNeeded must be between {MIN_PLAYERS_NEEDED} and {MAX_PLAYERS_NEEDED}"
        )
    return value


def parse_iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise ValidationError("date must be an ISO date (YYYY-MM-DD)")


def parse_iso_time(value: str) -> str:
    """Normalize to HH:MM wall-clock time; a UTC offset is dropped."""
    try:
        return time.fromisoformat(value).replace(tzinfo=None).isoformat(timespec="minutes")
    except ValueError:
        raise ValidationError("time must be an ISO time (HH:MM)")
