"""Datenmodell für ein Unterrichtsfach (Pydantic v2)."""

from pydantic import BaseModel, Field


class Subject(BaseModel):
    """Repräsentiert ein Unterrichtsfach."""

    id: int
    name: str
    code: str                                # "MA", "PH"
    weekly_hours: int = Field(3, ge=0)      # benötigte Perioden pro Woche
    requires_lab: bool = False
