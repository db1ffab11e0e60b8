"""Zuordnungen Klasse↔Fach und Lehrkraft↔Fach (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel


class ClassSubjectAssignment(BaseModel):
    """Eine Klasse muss ein Fach erhalten; optional mit Wunsch-Lehrkraft/-Raum.

    Die Arbeitseinheit des Generators.
    """

    class_id: int
    subject_id: int
    teacher_id: Optional[int] = None          # bevorzugte Lehrkraft
    preferred_room_id: Optional[int] = None


class TeacherSubjectAssignment(BaseModel):
    """Lehrkraft darf dieses Fach unterrichten."""

    teacher_id: int
    subject_id: int
