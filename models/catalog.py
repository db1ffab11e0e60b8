"""Catalog: Vollständiger Stammdaten-Schnappschuss + Machbarkeits-Check (Pydantic v2)."""

from collections import Counter
from pathlib import Path

from pydantic import BaseModel, model_validator

from models.assignment import ClassSubjectAssignment, TeacherSubjectAssignment
from models.constraint import Constraint
from models.room import Room, RoomType
from models.school_class import SchoolClass
from models.subject import Subject
from models.teacher import Teacher
from models.time_period import TimePeriod


class FeasibilityReport(BaseModel):
    """Ergebnis des Machbarkeits-Checks."""

    is_feasible: bool
    errors: list[str]      # Kritische Probleme (Plan bleibt sicher unvollständig)
    warnings: list[str]    # Hinweise (Plan wird schwierig)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ PLANBAR[/bold green]"
        else:
            status = "[bold red]✗ NICHT VOLLSTÄNDIG PLANBAR[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Machbarkeits-Check", border_style="cyan"))


def _duplicates(ids) -> list:
    return sorted(i for i, n in Counter(ids).items() if n > 1)


class Catalog(BaseModel):
    """Alle Stammdaten, die ein Generierungslauf liest.

    Wird pro Lauf einmal geladen und währenddessen nicht verändert.
    """

    classes: list[SchoolClass] = []
    subjects: list[Subject] = []
    teachers: list[Teacher] = []
    rooms: list[Room] = []
    time_periods: list[TimePeriod] = []
    class_subjects: list[ClassSubjectAssignment] = []
    teacher_subjects: list[TeacherSubjectAssignment] = []
    constraints: list[Constraint] = []

    @model_validator(mode="after")
    def _check_integrity(self):
        for label, items in (
            ("Klassen", self.classes),
            ("Fächer", self.subjects),
            ("Lehrkräfte", self.teachers),
            ("Räume", self.rooms),
            ("Perioden", self.time_periods),
            ("Constraints", self.constraints),
        ):
            dupes = _duplicates(item.id for item in items)
            if dupes:
                raise ValueError(f"{label}: doppelte IDs {dupes}")

        class_ids = {c.id for c in self.classes}
        subject_ids = {s.id for s in self.subjects}
        teacher_ids = {t.id for t in self.teachers}
        room_ids = {r.id for r in self.rooms}

        for cs in self.class_subjects:
            if cs.class_id not in class_ids:
                raise ValueError(f"Zuordnung verweist auf unbekannte Klasse {cs.class_id}")
            if cs.subject_id not in subject_ids:
                raise ValueError(f"Zuordnung verweist auf unbekanntes Fach {cs.subject_id}")
            if cs.teacher_id is not None and cs.teacher_id not in teacher_ids:
                raise ValueError(f"Zuordnung verweist auf unbekannte Lehrkraft {cs.teacher_id}")
            if cs.preferred_room_id is not None and cs.preferred_room_id not in room_ids:
                raise ValueError(f"Zuordnung verweist auf unbekannten Raum {cs.preferred_room_id}")

        for ts in self.teacher_subjects:
            if ts.teacher_id not in teacher_ids:
                raise ValueError(f"Lehrbefähigung für unbekannte Lehrkraft {ts.teacher_id}")
            if ts.subject_id not in subject_ids:
                raise ValueError(f"Lehrbefähigung für unbekanntes Fach {ts.subject_id}")
        return self

    # ─── Übersicht ───

    @property
    def schedulable_periods(self) -> list[TimePeriod]:
        return [p for p in self.time_periods if not p.is_break]

    def eligible_teacher_ids(self, subject_id: int) -> list[int]:
        """Lehrkräfte mit Lehrbefähigung für das Fach (Katalog-Reihenfolge)."""
        return [ts.teacher_id for ts in self.teacher_subjects if ts.subject_id == subject_id]

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        subject_map = {s.id: s for s in self.subjects}
        total_need = sum(
            subject_map[cs.subject_id].weekly_hours for cs in self.class_subjects
        )
        total_cap = sum(t.max_classes_per_week for t in self.teachers)
        lines = [
            f"Klassen: {len(self.classes)}",
            f"Fächer: {len(self.subjects)}",
            f"Lehrkräfte: {len(self.teachers)} (Kapazität {total_cap} Std./Woche)",
            f"Räume: {len(self.rooms)} "
            f"({sum(1 for r in self.rooms if r.is_available)} verfügbar)",
            f"Perioden: {len(self.schedulable_periods)} planbar, "
            f"{len(self.time_periods) - len(self.schedulable_periods)} Pausen",
            f"Klasse-Fach-Zuordnungen: {len(self.class_subjects)} ({total_need} Std./Woche)",
            f"Aktive Constraints: {sum(1 for c in self.constraints if c.is_active)}",
        ]
        return "\n".join(lines)

    # ─── Machbarkeits-Check ───

    def validate_feasibility(self) -> FeasibilityReport:
        """Prüft ob der Datensatz grundsätzlich vollständig planbar ist.

        Prüfungen:
        1. Pro Fach: mindestens eine befähigte Lehrkraft
        2. Pro Fach: Bedarf ≤ Wochenkapazität der befähigten Lehrkräfte
        3. Pro Klasse: Bedarf ≤ Anzahl planbarer Perioden
        4. Räume: mindestens ein verfügbarer Raum, Labore für Laborfächer
        5. Lehrkräfte: Verfügbarkeit deckt mindestens eine Periode ab
        6. Wunsch-Lehrkraft ist für das Fach befähigt
        """
        errors: list[str] = []
        warnings: list[str] = []

        subject_map = {s.id: s for s in self.subjects}
        class_map = {c.id: c for c in self.classes}
        teacher_map = {t.id: t for t in self.teachers}
        periods = self.schedulable_periods

        if not self.class_subjects:
            errors.append("Keine Klasse-Fach-Zuordnungen vorhanden.")
        if not periods:
            errors.append("Keine planbaren Perioden (nur Pausen oder leer).")

        # ── 1./2. Fachbedarf vs. Lehrkapazität ──────────────────────────
        subject_need: dict[int, int] = {}
        for cs in self.class_subjects:
            hours = subject_map[cs.subject_id].weekly_hours
            subject_need[cs.subject_id] = subject_need.get(cs.subject_id, 0) + hours

        for subject_id, need in subject_need.items():
            subject = subject_map[subject_id]
            eligible = self.eligible_teacher_ids(subject_id)
            if not eligible:
                errors.append(
                    f"Fach '{subject.name}': Keine befähigte Lehrkraft "
                    f"({need} Std./Woche werden benötigt)."
                )
                continue
            cap = sum(teacher_map[t].max_classes_per_week for t in eligible)
            if cap < need:
                errors.append(
                    f"Fach '{subject.name}': Wochenkapazität der Lehrkräfte ({cap}) "
                    f"< Bedarf ({need})."
                )
            elif cap < need * 1.10:
                warnings.append(
                    f"Fach '{subject.name}': Auslastung sehr hoch – "
                    f"{need} Std. Bedarf bei {cap} Std. Kapazität."
                )

        # ── 3. Klassenbedarf vs. Perioden ───────────────────────────────
        class_need: dict[int, int] = {}
        for cs in self.class_subjects:
            hours = subject_map[cs.subject_id].weekly_hours
            class_need[cs.class_id] = class_need.get(cs.class_id, 0) + hours
        for class_id, need in class_need.items():
            if need > len(periods):
                errors.append(
                    f"Klasse {class_map[class_id].name}: {need} Std./Woche benötigt, "
                    f"aber nur {len(periods)} planbare Perioden."
                )

        # ── 4. Räume ────────────────────────────────────────────────────
        available_rooms = [r for r in self.rooms if r.is_available]
        if self.rooms and not available_rooms:
            errors.append("Kein Raum ist als verfügbar markiert.")
        elif not self.rooms:
            warnings.append("Keine Räume angelegt – Einträge erhalten keinen Raum.")

        lab_subjects = [
            subject_map[sid].name for sid in subject_need if subject_map[sid].requires_lab
        ]
        if lab_subjects and not any(r.type == RoomType.LABORATORY for r in available_rooms):
            warnings.append(
                f"Laborfächer ({', '.join(sorted(lab_subjects))}) vorhanden, "
                f"aber kein verfügbares Labor."
            )

        if available_rooms and periods:
            room_slots = len(available_rooms) * len(periods)
            total_need = sum(subject_need.values())
            if total_need > room_slots:
                errors.append(
                    f"Raumengpass: {total_need} Std./Woche benötigt, "
                    f"aber nur {room_slots} Raum-Perioden."
                )

        # ── 5. Verfügbarkeit ────────────────────────────────────────────
        from solver.availability import is_teacher_available

        for teacher in self.teachers:
            if teacher.is_fully_available or not periods:
                continue
            if not any(is_teacher_available(teacher, p) for p in periods):
                warnings.append(
                    f"Lehrkraft {teacher.name}: Verfügbarkeit deckt keine Periode ab."
                )

        # ── 6. Wunsch-Lehrkräfte ────────────────────────────────────────
        for cs in self.class_subjects:
            if cs.teacher_id is None:
                continue
            if cs.teacher_id not in self.eligible_teacher_ids(cs.subject_id):
                warnings.append(
                    f"Wunsch-Lehrkraft {teacher_map[cs.teacher_id].name} ist für "
                    f"'{subject_map[cs.subject_id].name}' in "
                    f"{class_map[cs.class_id].name} nicht befähigt."
                )

        return FeasibilityReport(
            is_feasible=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den Katalog als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "Catalog":
        """Lädt einen Katalog aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
