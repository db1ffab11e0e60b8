"""Verfügbarkeitsprüfung für Lehrkräfte.

Verglichen wird stundengenau: eine Periode 08:30–09:15 passt in ein
Fenster 08:00–09:00, weil nur die Stunden (8 ≥ 8, 9 ≤ 9) zählen.
"""

from models.teacher import Teacher
from models.time_period import TimePeriod


def is_teacher_available(teacher: Teacher, period: TimePeriod) -> bool:
    """True wenn die Periode vollständig in einem Verfügbarkeitsfenster liegt."""
    if teacher.availability is None:
        return True

    windows = teacher.availability.get(period.day_of_week)
    if not windows:
        return False

    return any(
        w.start_hour <= period.start_hour and w.end_hour >= period.end_hour
        for w in windows
    )
