"""Slot policy: which half-hour labels can be booked, and when.

Everything in here is pure. The current instant is always passed in as
``now``; nothing reads the clock.

- Business grid: start_time (inclusive) to end_time (exclusive) in fixed steps
- Weekday gate: only the configured days are bookable
- Past filtering: on "today", slots that already started are dropped
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from booking import config


WEEKDAY_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
)


class TimeOfDay(str, Enum):
    """Time of day preferences."""
    MORNING = "morning"  # Before 12:00
    AFTERNOON = "afternoon"  # 12:00 and after
    ANY = "any"


def parse_time_label(label: str) -> Optional[time]:
    """Parse an ``HH:MM`` label, returning None when it is not a clock time."""
    try:
        return datetime.strptime(label, "%H:%M").time()
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class SlotPolicy:
    """
    Business-hours policy for a single calendar.

    Immutable: an alternate schedule is a new SlotPolicy, never a mutation
    of the default one.
    """
    days: Tuple[str, ...] = ("monday", "tuesday", "wednesday", "thursday", "friday")
    start_time: str = "09:00"
    end_time: str = "17:00"
    slot_duration_minutes: int = 30

    MORNING_CUTOFF = 12  # 12:00 (noon)

    @classmethod
    def from_config(cls, operating_hours: dict = None) -> "SlotPolicy":
        """Build a policy from an OPERATING_HOURS style dict."""
        hours = operating_hours or config.OPERATING_HOURS
        return cls(
            days=tuple(day.lower() for day in hours["days"]),
            start_time=hours["start_time"],
            end_time=hours["end_time"],
            slot_duration_minutes=hours["slot_duration_minutes"],
        )

    def business_slots(self) -> List[str]:
        """
        Every bookable label of a day, ascending.

        Returns:
            Labels like ["09:00", "09:30", ..., "16:30"] for the default policy
        """
        start = datetime.strptime(self.start_time, "%H:%M")
        end = datetime.strptime(self.end_time, "%H:%M")
        step = timedelta(minutes=self.slot_duration_minutes)

        slots = []
        current = start
        while current < end:
            slots.append(current.strftime("%H:%M"))
            current += step

        return slots

    def is_bookable_weekday(self, day: date) -> bool:
        """True iff the day of week is one of the configured days."""
        return WEEKDAY_NAMES[day.weekday()] in self.days

    @staticmethod
    def is_past(day: date, time_label: str, now: datetime) -> bool:
        """
        Check whether a slot's start instant is strictly before ``now``.

        A slot starting exactly at ``now`` is not in the past.

        Raises:
            ValueError: If time_label is not an HH:MM clock time
        """
        slot_time = parse_time_label(time_label)
        if slot_time is None:
            raise ValueError(f"Invalid time label: {time_label!r}")
        return datetime.combine(day, slot_time) < now

    def available_slots(
        self,
        day: date,
        booked_times: Iterable[str],
        now: datetime
    ) -> List[str]:
        """
        Labels that can still be booked on ``day``.

        Args:
            day: Calendar date to check
            booked_times: Labels already taken on that date
            now: Current instant

        Returns:
            Ascending labels; empty for non-bookable weekdays and past dates
        """
        if not self.is_bookable_weekday(day):
            return []

        today = now.date()
        if day < today:
            return []

        booked = set(booked_times)
        is_today = day == today

        return [
            slot for slot in self.business_slots()
            if slot not in booked
            and not (is_today and self.is_past(day, slot, now))
        ]

    def filter_by_time_of_day(
        self,
        slots: List[str],
        preference: TimeOfDay
    ) -> List[str]:
        """
        Filter slot labels by time of day preference.

        Args:
            slots: Available labels
            preference: Morning, afternoon, or any

        Returns:
            Filtered labels, order preserved
        """
        if preference == TimeOfDay.ANY:
            return list(slots)

        filtered = []
        for slot in slots:
            hour = int(slot.split(":")[0])

            if preference == TimeOfDay.MORNING and hour < self.MORNING_CUTOFF:
                filtered.append(slot)
            elif preference == TimeOfDay.AFTERNOON and hour >= self.MORNING_CUTOFF:
                filtered.append(slot)

        return filtered


@lru_cache(maxsize=1)
def get_default_policy() -> SlotPolicy:
    """Policy built from config.OPERATING_HOURS (cached)."""
    return SlotPolicy.from_config()


def business_slots() -> List[str]:
    return get_default_policy().business_slots()


def is_bookable_weekday(day: date) -> bool:
    return get_default_policy().is_bookable_weekday(day)


def is_past(day: date, time_label: str, now: datetime) -> bool:
    return SlotPolicy.is_past(day, time_label, now)


def available_slots(day: date, booked_times: Iterable[str], now: datetime) -> List[str]:
    return get_default_policy().available_slots(day, booked_times, now)
