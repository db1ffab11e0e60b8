"""Auslastungsübersicht der Lehrkräfte für einen Stundenplan."""

from collections import defaultdict

from pydantic import BaseModel

from models.catalog import Catalog
from models.time_period import DayOfWeek
from models.timetable import GeneratedEntry


class TeacherWorkloadMetrics(BaseModel):
    """Ist-Perioden einer Lehrkraft im Vergleich zu ihren Obergrenzen."""

    teacher_id: int
    name: str
    per_day: dict[DayOfWeek, int]
    total: int
    max_per_day: int
    max_per_week: int

    @property
    def utilization(self) -> float:
        return self.total / self.max_per_week


def workload_summary(
    entries: list[GeneratedEntry], catalog: Catalog
) -> list[TeacherWorkloadMetrics]:
    """Zählt Perioden pro Lehrkraft und Tag (Katalog-Reihenfolge)."""
    periods = {p.id: p for p in catalog.time_periods}
    counts: dict[int, dict[DayOfWeek, int]] = defaultdict(lambda: {d: 0 for d in DayOfWeek})
    for e in entries:
        period = periods.get(e.time_period_id)
        if period is None:
            continue
        counts[e.teacher_id][period.day_of_week] += 1

    metrics = []
    for teacher in catalog.teachers:
        per_day = counts[teacher.id]
        metrics.append(TeacherWorkloadMetrics(
            teacher_id=teacher.id,
            name=teacher.name,
            per_day=dict(per_day),
            total=sum(per_day.values()),
            max_per_day=teacher.max_classes_per_day,
            max_per_week=teacher.max_classes_per_week,
        ))
    return metrics


def print_workload(metrics: list[TeacherWorkloadMetrics]) -> None:
    """Gibt die Auslastung als Rich-Tabelle aus."""
    from rich.console import Console
    from rich.table import Table
    from rich import box

    table = Table(title="Lehrer-Auslastung", box=box.ROUNDED)
    table.add_column("ID", justify="right", width=4)
    table.add_column("Name", width=24)
    for day in DayOfWeek:
        table.add_column(day.short_name, justify="right", width=4)
    table.add_column("Ist", justify="right", width=5)
    table.add_column("Max", justify="right", width=5)
    table.add_column("Auslastung", justify="right", width=10)

    for m in metrics:
        color = (
            "green" if m.utilization <= 0.8
            else "yellow" if m.utilization < 1.0
            else "red"
        )
        table.add_row(
            str(m.teacher_id),
            m.name,
            *[str(m.per_day[day]) for day in DayOfWeek],
            str(m.total),
            str(m.max_per_week),
            f"[{color}]{m.utilization:.0%}[/{color}]",
        )
    Console().print(table)
