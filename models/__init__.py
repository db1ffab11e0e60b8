from models.school_class import SchoolClass
from models.subject import Subject
from models.teacher import Teacher, AvailabilityWindow
from models.room import Room, RoomType
from models.time_period import TimePeriod, DayOfWeek
from models.assignment import ClassSubjectAssignment, TeacherSubjectAssignment
from models.constraint import (
    Constraint, ConstraintType, ConstraintScope, EmptyRule, CustomRule,
)
from models.catalog import Catalog, FeasibilityReport
from models.timetable import GeneratedEntry

__all__ = [
    "SchoolClass",
    "Subject",
    "Teacher",
    "AvailabilityWindow",
    "Room",
    "RoomType",
    "TimePeriod",
    "DayOfWeek",
    "ClassSubjectAssignment",
    "TeacherSubjectAssignment",
    "Constraint",
    "ConstraintType",
    "ConstraintScope",
    "EmptyRule",
    "CustomRule",
    "Catalog",
    "FeasibilityReport",
    "GeneratedEntry",
]
