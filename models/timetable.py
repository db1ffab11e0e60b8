"""Datenmodell für einen Stundenplan-Eintrag (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel


class GeneratedEntry(BaseModel):
    """Eine belegte Periode: Klasse + Fach + Lehrkraft (+ Raum) zu einer Zeit."""

    class_id: int
    subject_id: int
    teacher_id: int
    room_id: Optional[int] = None
    time_period_id: int
    week_number: int = 1
    is_generated: bool = True
