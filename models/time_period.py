"""Datenmodell für eine Zeitperiode im Wochenraster (Pydantic v2)."""

import re
from enum import Enum

from pydantic import BaseModel, field_validator, model_validator

_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"

    @property
    def short_name(self) -> str:
        """Abgekürzter Tagesname ("Mo", "Di", ...)."""
        return _SHORT_NAMES[self]


_SHORT_NAMES = {
    DayOfWeek.MONDAY: "Mo",
    DayOfWeek.TUESDAY: "Di",
    DayOfWeek.WEDNESDAY: "Mi",
    DayOfWeek.THURSDAY: "Do",
    DayOfWeek.FRIDAY: "Fr",
}


def validate_clock_time(value: str) -> str:
    """Prüft das Format "HH:MM" und gibt den String unverändert zurück."""
    if not _TIME_RE.match(value):
        raise ValueError(f"Ungültige Uhrzeit '{value}' (erwartet HH:MM)")
    return value


def parse_hour(value: str) -> int:
    """Stunde aus "HH:MM" (Minuten werden bewusst ignoriert)."""
    return int(value.split(":")[0])


def to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class TimePeriod(BaseModel):
    """Eine planbare Unterrichtsperiode an einem Wochentag.

    Pausen (is_break=True) werden nie belegt. Die Reihenfolge innerhalb
    der Woche ergibt sich aus order_index.
    """

    id: int
    name: str              # "1. Stunde", "Period 1"
    start_time: str        # "08:00"
    end_time: str          # "08:45"
    day_of_week: DayOfWeek
    is_break: bool = False
    order_index: int

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_times(cls, v: str) -> str:
        return validate_clock_time(v)

    @model_validator(mode="after")
    def _check_order(self):
        if to_minutes(self.end_time) <= to_minutes(self.start_time):
            raise ValueError(
                f"Periode {self.id}: Ende {self.end_time} liegt nicht nach "
                f"Beginn {self.start_time}"
            )
        return self

    @property
    def start_hour(self) -> int:
        return parse_hour(self.start_time)

    @property
    def end_hour(self) -> int:
        return parse_hour(self.end_time)

    @property
    def label(self) -> str:
        """Kurzbezeichnung für Meldungen, z.B. "Mo 08:00 (1. Stunde)"."""
        return f"{self.day_of_week.short_name} {self.start_time} ({self.name})"
