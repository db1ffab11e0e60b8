"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from models.time_period import DayOfWeek, parse_hour, to_minutes, validate_clock_time


class AvailabilityWindow(BaseModel):
    """Zeitfenster, in dem eine Lehrkraft unterrichten kann ("08:00"–"12:00")."""

    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _check_time(cls, v: str) -> str:
        return validate_clock_time(v)

    @model_validator(mode="after")
    def _check_order(self):
        if to_minutes(self.end) <= to_minutes(self.start):
            raise ValueError(f"Zeitfenster {self.start}-{self.end} ist leer")
        return self

    @property
    def start_hour(self) -> int:
        return parse_hour(self.start)

    @property
    def end_hour(self) -> int:
        return parse_hour(self.end)


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft.

    availability=None bedeutet: jederzeit verfügbar. Ist ein Mapping gesetzt,
    gelten Tage ohne Eintrag als nicht verfügbar.
    """

    id: int
    name: str                                     # "Müller, Hans"
    email: Optional[str] = None
    max_classes_per_day: int = Field(6, ge=1)
    max_classes_per_week: int = Field(30, ge=1)
    availability: Optional[dict[DayOfWeek, list[AvailabilityWindow]]] = None

    @property
    def is_fully_available(self) -> bool:
        return self.availability is None
