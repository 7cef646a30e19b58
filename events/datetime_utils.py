# events/datetime_utils.py
"""
Datetime helpers for event listings.

All "now" comparisons go through ``now()`` so tests can patch one place.
"""
from datetime import datetime
from typing import Optional
from django.utils import timezone


def now() -> datetime:
    return timezone.now()


def is_event_upcoming(event) -> bool:
    """Check if event hasn't started yet."""
    if not event.start_date:
        return False
    return event.start_date > now()


def is_event_ongoing(event) -> bool:
    """Check if event is currently happening."""
    if not event.start_date or not event.end_date:
        return False
    current = now()
    return event.start_date <= current <= event.end_date


def is_event_past(event) -> bool:
    """Check if event has ended."""
    if not event.end_date:
        return False
    return event.end_date < now()


def is_registration_open(event) -> bool:
    """
    Registration closes at the deadline when one is set, otherwise when
    the event ends.
    """
    closes_at: Optional[datetime] = event.registration_deadline or event.end_date
    if closes_at is None:
        return False
    return now() <= closes_at


def event_phase(event) -> str:
    """Listing phase of an event; "unscheduled" when it has no dates."""
    if is_event_upcoming(event):
        return "upcoming"
    if is_event_ongoing(event):
        return "ongoing"
    if is_event_past(event):
        return "past"
    return "unscheduled"
