"""Konflikterkennung (Doppelbelegungen) und lokale Konfliktauflösung."""

import logging
from dataclasses import dataclass
from typing import Optional

from models.timetable import GeneratedEntry
from solver.availability import is_teacher_available
from solver.context import RunContext
from solver.slot_finder import CandidateSlot

logger = logging.getLogger(__name__)


@dataclass
class ConflictCheck:
    teacher_conflict: bool = False
    room_conflict: bool = False
    class_conflict: bool = False

    @property
    def has_conflict(self) -> bool:
        return self.teacher_conflict or self.room_conflict or self.class_conflict


class ConflictDetector:
    """Reine Prüfung eines Eintrags gegen die bereits übernommenen Einträge."""

    def check(self, entry: GeneratedEntry, committed: list[GeneratedEntry]) -> ConflictCheck:
        result = ConflictCheck()
        for other in committed:
            if other.time_period_id != entry.time_period_id:
                continue
            if other.teacher_id == entry.teacher_id:
                result.teacher_conflict = True
            if entry.room_id is not None and other.room_id == entry.room_id:
                result.room_conflict = True
            if other.class_id == entry.class_id:
                result.class_conflict = True
        return result


class ConflictResolver:
    """Versucht einen Konflikt durch Tausch von Lehrkraft oder Raum zu lösen.

    Reihenfolge: erst eine andere befähigte, verfügbare Lehrkraft, dann ein
    anderer verfügbarer Raum. Obergrenzen prüft der Generator vor der Übernahme.
    """

    def __init__(self, ctx: RunContext, detector: ConflictDetector) -> None:
        self.ctx = ctx
        self.detector = detector

    def resolve(
        self, entry: GeneratedEntry, candidate: CandidateSlot
    ) -> Optional[GeneratedEntry]:
        period = candidate.time_period

        # Lehrkraft tauschen
        for teacher_id in self.ctx.eligible_teachers(entry.subject_id):
            if teacher_id == entry.teacher_id:
                continue
            teacher = self.ctx.teachers[teacher_id]
            if not is_teacher_available(teacher, period):
                continue
            alternative = entry.model_copy(update={"teacher_id": teacher_id})
            check = self.detector.check(alternative, self.ctx.entries)
            if not check.teacher_conflict and not check.class_conflict:
                logger.debug(
                    f"Konflikt gelöst: Lehrkraft {entry.teacher_id} → {teacher_id} "
                    f"in {period.label}"
                )
                return alternative

        # Raum tauschen
        if entry.room_id is not None:
            for room in self.ctx.catalog.rooms:
                if room.id == entry.room_id or not room.is_available:
                    continue
                alternative = entry.model_copy(update={"room_id": room.id})
                check = self.detector.check(alternative, self.ctx.entries)
                if not check.room_conflict:
                    logger.debug(
                        f"Konflikt gelöst: Raum {entry.room_id} → {room.id} "
                        f"in {period.label}"
                    )
                    return alternative

        return None
