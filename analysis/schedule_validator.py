"""Nachträgliche Validierung eines generierten Stundenplans.

Prüft die Einträge unabhängig vom Generator als Sicherheitsnetz:
Doppelbelegungen, Obergrenzen, Wochenstunden, Pausen, Verfügbarkeit.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.catalog import Catalog
from models.timetable import GeneratedEntry
from solver.availability import is_teacher_available


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "teacher_double_booking"
    description: str
    entity: str          # Lehrkraft / Klasse / Raum


class ValidationReport(BaseModel):
    """Ergebnis der Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "warning"]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"]
        console.print(Panel("\n".join(lines), title="Stundenplan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=26)
        table.add_column("Entität", width=16)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class ScheduleValidator:
    """Prüft eine Liste von Stundenplan-Einträgen gegen den Katalog."""

    def validate(self, entries: list[GeneratedEntry], catalog: Catalog) -> ValidationReport:
        """Führt alle Prüfungen durch und gibt einen ValidationReport zurück."""
        periods = {p.id: p for p in catalog.time_periods}
        unknown = [e for e in entries if e.time_period_id not in periods]
        if unknown:
            violations = [
                ValidationViolation(
                    severity="error",
                    constraint="unknown_period",
                    entity=f"Klasse {e.class_id}",
                    description=f"Periode {e.time_period_id} existiert nicht.",
                )
                for e in unknown
            ]
            return ValidationReport(violations=violations, is_valid=False)

        violations: list[ValidationViolation] = []
        violations.extend(self._check_double_booking(entries, catalog))
        violations.extend(self._check_workload_caps(entries, catalog))
        violations.extend(self._check_weekly_hours(entries, catalog))
        violations.extend(self._check_breaks(entries, catalog))
        violations.extend(self._check_availability(entries, catalog))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_double_booking(
        self, entries: list[GeneratedEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Lehrkraft, Raum und Klasse höchstens einmal pro Periode."""
        violations: list[ValidationViolation] = []
        periods = {p.id: p for p in catalog.time_periods}
        names = {
            "teacher": {t.id: t.name for t in catalog.teachers},
            "room": {r.id: r.name for r in catalog.rooms},
            "class": {c.id: c.name for c in catalog.classes},
        }

        by_slot: dict[tuple, list[GeneratedEntry]] = defaultdict(list)
        for e in entries:
            by_slot[("teacher", e.teacher_id, e.time_period_id)].append(e)
            by_slot[("class", e.class_id, e.time_period_id)].append(e)
            if e.room_id is not None:
                by_slot[("room", e.room_id, e.time_period_id)].append(e)

        for (kind, entity_id, period_id), booked in by_slot.items():
            if len(booked) <= 1:
                continue
            violations.append(ValidationViolation(
                severity="error",
                constraint=f"{kind}_double_booking",
                entity=names[kind].get(entity_id, str(entity_id)),
                description=(
                    f"{periods[period_id].label}: {len(booked)} Einträge gleichzeitig."
                ),
            ))
        return violations

    def _check_workload_caps(
        self, entries: list[GeneratedEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Tages- und Wochenobergrenzen der Lehrkräfte."""
        violations: list[ValidationViolation] = []
        periods = {p.id: p for p in catalog.time_periods}
        per_day: dict[tuple, int] = defaultdict(int)
        per_week: dict[int, int] = defaultdict(int)
        for e in entries:
            per_day[(e.teacher_id, periods[e.time_period_id].day_of_week)] += 1
            per_week[e.teacher_id] += 1

        teachers = {t.id: t for t in catalog.teachers}
        for (teacher_id, day), count in per_day.items():
            teacher = teachers.get(teacher_id)
            if teacher is not None and count > teacher.max_classes_per_day:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="daily_cap_exceeded",
                    entity=teacher.name,
                    description=(
                        f"{day.short_name}: {count} Perioden "
                        f"(max {teacher.max_classes_per_day})."
                    ),
                ))

        for teacher in catalog.teachers:
            total = per_week.get(teacher.id, 0)
            if total > teacher.max_classes_per_week:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="weekly_cap_exceeded",
                    entity=teacher.name,
                    description=f"{total} Perioden (max {teacher.max_classes_per_week}).",
                ))
        return violations

    def _check_weekly_hours(
        self, entries: list[GeneratedEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Ist-Stunden pro Klasse/Fach gegen weekly_hours.

        Zu viele Stunden sind ein Fehler, fehlende nur eine Warnung.
        """
        violations: list[ValidationViolation] = []
        subjects = {s.id: s for s in catalog.subjects}
        classes = {c.id: c for c in catalog.classes}
        actual: dict[tuple, int] = defaultdict(int)
        for e in entries:
            actual[(e.class_id, e.subject_id)] += 1

        for cs in catalog.class_subjects:
            subject = subjects[cs.subject_id]
            got = actual.get((cs.class_id, cs.subject_id), 0)
            if got == subject.weekly_hours:
                continue
            violations.append(ValidationViolation(
                severity="error" if got > subject.weekly_hours else "warning",
                constraint="weekly_hours_mismatch",
                entity=classes[cs.class_id].name,
                description=(
                    f"Fach {subject.name}: Soll {subject.weekly_hours}h, Ist {got}h "
                    f"(Differenz {got - subject.weekly_hours:+d}h)."
                ),
            ))
        return violations

    def _check_breaks(
        self, entries: list[GeneratedEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Pausen dürfen nicht belegt sein."""
        breaks = {p.id: p for p in catalog.time_periods if p.is_break}
        classes = {c.id: c.name for c in catalog.classes}
        return [
            ValidationViolation(
                severity="error",
                constraint="break_scheduled",
                entity=classes.get(e.class_id, str(e.class_id)),
                description=f"Eintrag in Pause {breaks[e.time_period_id].label}.",
            )
            for e in entries
            if e.time_period_id in breaks
        ]

    def _check_availability(
        self, entries: list[GeneratedEntry], catalog: Catalog
    ) -> list[ValidationViolation]:
        """Lehrkraft außerhalb ihrer Verfügbarkeit (z.B. durch Wunsch-Lehrkraft)."""
        violations: list[ValidationViolation] = []
        teachers = {t.id: t for t in catalog.teachers}
        periods = {p.id: p for p in catalog.time_periods}
        for e in entries:
            teacher = teachers.get(e.teacher_id)
            if teacher is None:
                continue
            period = periods[e.time_period_id]
            if not is_teacher_available(teacher, period):
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="teacher_unavailable",
                    entity=teacher.name,
                    description=f"{period.label}: außerhalb der Verfügbarkeit eingeplant.",
                ))
        return violations
