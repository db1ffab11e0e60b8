"""Slot-Suche: First-Fit über Perioden, Lehrkräfte und Räume."""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional

from models.assignment import ClassSubjectAssignment
from models.time_period import TimePeriod
from solver.availability import is_teacher_available
from solver.context import RunContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateSlot:
    """Vorschlag: Periode + Lehrkraft (+ Raum) für eine Klasse-Fach-Zuordnung."""

    time_period: TimePeriod
    teacher_id: int
    room_id: Optional[int] = None


class SlotFinder:
    """Sucht Kandidaten-Slots für eine Zuordnung.

    Strikter First-Fit: Perioden in Laufreihenfolge, pro Periode die erste
    befähigte Lehrkraft, die verfügbar ist und ihre Obergrenzen nicht
    erreicht hat. Keine Vorausschau, kein Zurücknehmen früherer Wahl.
    """

    def __init__(self, ctx: RunContext) -> None:
        self.ctx = ctx

    def find(
        self, assignment: ClassSubjectAssignment, periods_needed: int
    ) -> list[CandidateSlot]:
        slots: list[CandidateSlot] = []
        if periods_needed <= 0:
            return slots

        teacher_ids = self.ctx.eligible_teachers(assignment.subject_id)
        pending_day: Counter = Counter()     # (teacher_id, day) -> vorgemerkt
        pending_total: Counter = Counter()   # teacher_id -> vorgemerkt

        for period in self.ctx.ordered_periods:
            if len(slots) >= periods_needed:
                break

            day = period.day_of_week
            for teacher_id in teacher_ids:
                teacher = self.ctx.teachers[teacher_id]
                if not is_teacher_available(teacher, period):
                    continue
                if not self.ctx.workload.can_assign(
                    teacher,
                    day,
                    pending_day[(teacher_id, day)],
                    pending_total[teacher_id],
                ):
                    continue

                room_id = self._pick_room(assignment, period)
                slots.append(CandidateSlot(period, teacher_id, room_id))
                pending_day[(teacher_id, day)] += 1
                pending_total[teacher_id] += 1
                break

        logger.debug(
            f"Klasse {assignment.class_id} / Fach {assignment.subject_id}: "
            f"{len(slots)}/{periods_needed} Slots gefunden"
        )
        return slots

    def _pick_room(
        self, assignment: ClassSubjectAssignment, period: TimePeriod
    ) -> Optional[int]:
        """Wunschraum falls frei, sonst erster verfügbarer freier Raum."""
        preferred_id = assignment.preferred_room_id
        if preferred_id is not None:
            preferred = self.ctx.rooms.get(preferred_id)
            if (
                preferred is not None
                and preferred.is_available
                and not self.ctx.is_room_booked(preferred_id, period.id)
            ):
                return preferred_id

        for room in self.ctx.catalog.rooms:
            if room.is_available and not self.ctx.is_room_booked(room.id, period.id):
                return room.id
        return None
