"""Datenmodell für einen Raum (Pydantic v2)."""

from enum import Enum

from pydantic import BaseModel, Field


class RoomType(str, Enum):
    CLASSROOM = "classroom"
    LABORATORY = "laboratory"
    AUDITORIUM = "auditorium"
    GYM = "gym"
    LIBRARY = "library"


class Room(BaseModel):
    """Repräsentiert einen Raum.

    is_available ist ein statischer Schalter (z.B. Renovierung) und hat
    nichts mit der Belegung einzelner Perioden zu tun.
    """

    id: int
    name: str          # "R101", "Chemie-Labor"
    type: RoomType = RoomType.CLASSROOM
    capacity: int = Field(ge=1)
    is_available: bool = True
