"""Zustand eines einzelnen Generierungslaufs.

Jeder Aufruf von ScheduleGenerator.generate() erzeugt einen eigenen
RunContext; nichts davon wird zwischen Läufen geteilt.
"""

from config.schema import SchedulingOptions
from models.catalog import Catalog
from models.time_period import TimePeriod
from models.timetable import GeneratedEntry
from solver.workload import WorkloadTracker

def order_periods(periods: list[TimePeriod], prioritize_morning: bool) -> list[TimePeriod]:
    """Planbare Perioden in Suchreihenfolge (Pausen entfallen).

    Vormittags-Priorität sortiert stabil nach Beginn-Stunde, sonst nach order_index.
    """
    schedulable = [p for p in periods if not p.is_break]
    if prioritize_morning:
        return sorted(schedulable, key=lambda p: p.start_hour)
    return sorted(schedulable, key=lambda p: p.order_index)

class RunContext:
    def __init__(self, catalog: Catalog, options: SchedulingOptions) -> None:
        self.catalog = catalog
        self.options = options

        # Lookup-Strukturen
        self.classes = {c.id: c for c in catalog.classes}
        self.subjects = {s.id: s for s in catalog.subjects}
        self.teachers = {t.id: t for t in catalog.teachers}
        self.rooms = {r.id: r for r in catalog.rooms}
        self.periods = {p.id: p for p in catalog.time_periods}
        self._eligible: dict[int, list[int]] = {}
        for ts in catalog.teacher_subjects:
            self._eligible.setdefault(ts.subject_id, []).append(ts.teacher_id)

        self.ordered_periods = order_periods(
            catalog.time_periods, options.prioritize_morning_classes
        )
        self.workload = WorkloadTracker(catalog.teachers)

        # Übernommene Einträge + Raumbelegung
        self.entries: list[GeneratedEntry] = []
        self._room_booked: set[tuple[int, int]] = set()  # (room_id, period_id)

    def eligible_teachers(self, subject_id: int) -> list[int]:
        return self._eligible.get(subject_id, [])

    def is_room_booked(self, room_id: int, period_id: int) -> bool:
        return (room_id, period_id) in self._room_booked

    def within_caps(self, entry: GeneratedEntry) -> bool:
        """Obergrenzen der Lehrkraft des Eintrags noch nicht erreicht."""
        teacher = self.teachers[entry.teacher_id]
        day = self.periods[entry.time_period_id].day_of_week
        return self.workload.can_assign(teacher, day)

    def commit(self, entry: GeneratedEntry) -> None:
        """Übernimmt einen geprüften Eintrag und verbucht die Arbeitslast."""
        period = self.periods[entry.time_period_id]
        self.entries.append(entry)
        if entry.room_id is not None:
            self._room_booked.add((entry.room_id, period.id))
        self.workload.record(entry.teacher_id, period.day_of_week)
