"""Datenmodell für eine Schulklasse (Pydantic v2)."""

from pydantic import BaseModel, Field


class SchoolClass(BaseModel):
    """Repräsentiert eine Lerngruppe, für die ein Stundenplan erstellt wird."""

    id: int
    name: str                  # "7b"
    level: str                 # "Klasse 7", "JSS 1"
    section: str               # "b"
    max_students: int = Field(30, ge=1)
