"""Solver-Modul (Greedy-Stundenplangenerator)."""

from .generator import ScheduleGenerator, GenerationResult, GenerationStats
from .context import RunContext
from .slot_finder import SlotFinder, CandidateSlot
from .conflicts import ConflictDetector, ConflictResolver, ConflictCheck
from .constraints import ConstraintValidator
from .workload import WorkloadTracker
from .availability import is_teacher_available

__all__ = [
    "ScheduleGenerator",
    "GenerationResult",
    "GenerationStats",
    "RunContext",
    "SlotFinder",
    "CandidateSlot",
    "ConflictDetector",
    "ConflictResolver",
    "ConflictCheck",
    "ConstraintValidator",
    "WorkloadTracker",
    "is_teacher_available",
]
