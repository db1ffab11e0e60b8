"""Arbeitslast-Zähler pro Lehrkraft (Perioden pro Tag und pro Woche)."""

from collections import Counter

from models.teacher import Teacher
from models.time_period import DayOfWeek


class TeacherWorkload:
    """Zähler einer einzelnen Lehrkraft."""

    def __init__(self, teacher_id: int) -> None:
        self.teacher_id = teacher_id
        self.classes_per_day: dict[DayOfWeek, int] = {day: 0 for day in DayOfWeek}
        self.total_classes = 0

    def __repr__(self) -> str:
        return f"TeacherWorkload({self.teacher_id}, total={self.total_classes})"


class WorkloadTracker:
    """Führt die Tages- und Wochenzähler aller Lehrkräfte eines Laufs.

    Wird pro Lauf neu erzeugt; nur erfolgreiche Übernahmen (record) zählen.
    """

    def __init__(self, teachers: list[Teacher]) -> None:
        self._workloads: dict[int, TeacherWorkload] = {
            t.id: TeacherWorkload(t.id) for t in teachers
        }

    def can_assign(
        self,
        teacher: Teacher,
        day: DayOfWeek,
        pending_today: int = 0,
        pending_total: int = 0,
    ) -> bool:
        """Prüft Tages- und Wochenobergrenze.

        pending_* zählt Perioden, die bereits vorgemerkt, aber noch nicht
        übernommen sind.
        """
        workload = self._workloads.get(teacher.id)
        if workload is None:
            return False
        if workload.classes_per_day[day] + pending_today >= teacher.max_classes_per_day:
            return False
        if workload.total_classes + pending_total >= teacher.max_classes_per_week:
            return False
        return True

    def record(self, teacher_id: int, day: DayOfWeek) -> None:
        """Verbucht eine übernommene Periode."""
        workload = self._workloads[teacher_id]
        workload.classes_per_day[day] += 1
        workload.total_classes += 1

    def get(self, teacher_id: int) -> TeacherWorkload:
        return self._workloads[teacher_id]

    def totals(self) -> Counter:
        """Wochensumme pro Lehrkraft."""
        return Counter({tid: w.total_classes for tid, w in self._workloads.items()})
