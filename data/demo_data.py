"""Demo-Datensatz für den Stundenplan-Generator.

Erzeugt einen deterministischen Katalog (gleicher Seed → gleiche Daten):
  - Klassen 5a, 5b, 6a, ... mit je einem Klassenraum als Wunschraum
  - Pro Fach zwei Lehrkräfte, einige mit Zweitfach
  - Teilzeitkräfte: Freitag frei, Mo–Do nur 08:00–12:00
  - Labore, Sporthalle, Klassenräume, eine gesperrte Bibliothek
  - Wochenraster Mo–Fr nach DEFAULT_DAY_GRID (inkl. Pause)
  - Beispiel-Constraints (weich, global, benutzerdefiniert, inaktiv)
"""

import random
from typing import Optional

from config.defaults import DEFAULT_DAY_GRID, SCHOOL_DAYS, SUBJECT_METADATA
from config.schema import AppConfig
from models.assignment import ClassSubjectAssignment, TeacherSubjectAssignment
from models.catalog import Catalog
from models.constraint import (
    Constraint, ConstraintScope, ConstraintType, CustomRule, EmptyRule,
)
from models.room import Room, RoomType
from models.school_class import SchoolClass
from models.subject import Subject
from models.teacher import AvailabilityWindow, Teacher
from models.time_period import DayOfWeek, TimePeriod

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Andreas", "Anna", "Birgit", "Christian", "Dieter", "Eva", "Franz",
    "Iris", "Jürgen", "Kathrin", "Klaus", "Lena", "Markus", "Maria",
    "Norbert", "Sandra", "Stefan", "Tanja", "Ulrich", "Vera", "Yusuf", "Zoe",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer",
    "Wagner", "Becker", "Schulz", "Hoffmann", "Schäfer", "Koch",
    "Bauer", "Richter", "Klein", "Wolf", "Schröder", "Neumann",
    "Schwarz", "Zimmermann", "Braun", "Krüger", "Hartmann", "Lange",
]

_PART_TIME_WINDOW = AvailabilityWindow(start="08:00", end="12:00")


class DemoCatalogGenerator:
    """Generiert einen vollständigen Demo-Katalog auf Basis der AppConfig."""

    def __init__(
        self,
        config: AppConfig,
        seed: Optional[int] = None,
        num_classes: int = 6,
        teachers_per_subject: int = 2,
    ) -> None:
        self.config = config
        self.rng = random.Random(seed)
        self.num_classes = num_classes
        self.teachers_per_subject = teachers_per_subject
        self._used_names: set[str] = set()

    # ─── Fächer ───────────────────────────────────────────────────────────────

    def _generate_subjects(self) -> list[Subject]:
        return [
            Subject(id=i, name=name, code=code, weekly_hours=hours, requires_lab=lab)
            for i, (name, (code, hours, lab)) in enumerate(SUBJECT_METADATA.items(), start=1)
        ]

    # ─── Klassen ──────────────────────────────────────────────────────────────

    def _generate_classes(self) -> list[SchoolClass]:
        """Zwei Parallelklassen pro Jahrgang, beginnend bei Jahrgang 5."""
        classes = []
        for i in range(self.num_classes):
            level = 5 + i // 2
            section = "ab"[i % 2]
            classes.append(SchoolClass(
                id=i + 1,
                name=f"{level}{section}",
                level=f"Klasse {level}",
                section=section,
                max_students=self.rng.randint(24, 30),
            ))
        return classes

    # ─── Räume ────────────────────────────────────────────────────────────────

    def _generate_rooms(self, classes: list[SchoolClass]) -> list[Room]:
        """Fachräume zuerst, damit die freie Raumwahl Klassenräume schont."""
        rooms = [
            Room(id=1, name="Labor 1", type=RoomType.LABORATORY, capacity=30),
            Room(id=2, name="Labor 2", type=RoomType.LABORATORY, capacity=30),
            Room(id=3, name="Sporthalle", type=RoomType.GYM, capacity=60),
            Room(id=4, name="Aula", type=RoomType.AUDITORIUM, capacity=200),
        ]
        next_id = len(rooms) + 1
        for cls in classes:
            rooms.append(Room(
                id=next_id,
                name=f"R{100 + next_id}",
                type=RoomType.CLASSROOM,
                capacity=max(cls.max_students, 30),
            ))
            next_id += 1
        # Wegen Renovierung gesperrt
        rooms.append(Room(
            id=next_id, name="Bibliothek", type=RoomType.LIBRARY,
            capacity=40, is_available=False,
        ))
        return rooms

    # ─── Zeitraster ───────────────────────────────────────────────────────────

    def _generate_time_periods(self) -> list[TimePeriod]:
        periods = []
        for day in SCHOOL_DAYS:
            for name, start, end, is_break in DEFAULT_DAY_GRID:
                periods.append(TimePeriod(
                    id=len(periods) + 1,
                    name=name,
                    start_time=start,
                    end_time=end,
                    day_of_week=day,
                    is_break=is_break,
                    order_index=len(periods) + 1,
                ))
        return periods

    # ─── Lehrkräfte ───────────────────────────────────────────────────────────

    def _make_name(self) -> str:
        """Eindeutiger Name "Nachname, Vorname"."""
        while True:
            name = f"{self.rng.choice(_LAST_NAMES)}, {self.rng.choice(_FIRST_NAMES)}"
            if name not in self._used_names:
                self._used_names.add(name)
                return name

    def _generate_teachers(
        self, subjects: list[Subject]
    ) -> tuple[list[Teacher], list[TeacherSubjectAssignment]]:
        """Pro Fach teachers_per_subject Lehrkräfte; ca. 30% mit Zweitfach.

        Die erste Lehrkraft eines Fachs ist immer Vollzeit, damit jedes Fach
        ohne Einschränkung planbar bleibt.
        """
        defaults = self.config.teacher_defaults
        teachers: list[Teacher] = []
        qualifications: list[TeacherSubjectAssignment] = []

        for subject in subjects:
            for n in range(self.teachers_per_subject):
                teacher_id = len(teachers) + 1
                part_time = n > 0 and self.rng.random() < 0.25
                name = self._make_name()
                last, first = name.split(", ")
                email = f"{first.lower()}.{last.lower()}@schule.example"

                if part_time:
                    teacher = Teacher(
                        id=teacher_id,
                        name=name,
                        email=email,
                        max_classes_per_day=min(4, defaults.max_classes_per_day),
                        max_classes_per_week=min(16, defaults.max_classes_per_week),
                        availability={
                            day: [_PART_TIME_WINDOW]
                            for day in SCHOOL_DAYS if day != DayOfWeek.FRIDAY
                        },
                    )
                else:
                    teacher = Teacher(
                        id=teacher_id,
                        name=name,
                        email=email,
                        max_classes_per_day=defaults.max_classes_per_day,
                        max_classes_per_week=defaults.max_classes_per_week,
                    )
                teachers.append(teacher)
                qualifications.append(
                    TeacherSubjectAssignment(teacher_id=teacher_id, subject_id=subject.id)
                )

                if self.rng.random() < 0.30:
                    second = self.rng.choice([s for s in subjects if s.id != subject.id])
                    qualifications.append(
                        TeacherSubjectAssignment(teacher_id=teacher_id, subject_id=second.id)
                    )

        return teachers, qualifications

    # ─── Zuordnungen + Constraints ────────────────────────────────────────────

    def _generate_class_subjects(
        self,
        classes: list[SchoolClass],
        subjects: list[Subject],
        rooms: list[Room],
    ) -> list[ClassSubjectAssignment]:
        """Jede Klasse erhält jedes Fach; ohne Laborbedarf im eigenen Klassenraum."""
        home_rooms = [r for r in rooms if r.type == RoomType.CLASSROOM]
        assignments = []
        for cls, home in zip(classes, home_rooms):
            for subject in subjects:
                if subject.weekly_hours == 0:
                    continue
                use_home = not subject.requires_lab and subject.code != "SP"
                assignments.append(ClassSubjectAssignment(
                    class_id=cls.id,
                    subject_id=subject.id,
                    preferred_room_id=home.id if use_home else None,
                ))
        return assignments

    def _generate_constraints(self, rooms: list[Room]) -> list[Constraint]:
        aula = next(r for r in rooms if r.type == RoomType.AUDITORIUM)
        return [
            Constraint(
                id=1,
                name="Hauptfächer vormittags",
                description="Deutsch, Mathematik und Englisch möglichst in den ersten Stunden",
                type=ConstraintType.SOFT,
                scope=ConstraintScope.GLOBAL,
                rule=CustomRule(payload={"subjects": ["DE", "MA", "EN"], "latest_period": 4}),
                priority=7,
            ),
            Constraint(
                id=2,
                name="Aula nur für Veranstaltungen",
                type=ConstraintType.HARD,
                scope=ConstraintScope.ROOM,
                target_id=aula.id,
                rule=EmptyRule(),
                priority=9,
                is_active=False,
            ),
        ]

    # ─── Vollständiger Datensatz ──────────────────────────────────────────────

    def generate(self) -> Catalog:
        """Erzeugt den vollständigen Datensatz als Catalog-Objekt."""
        subjects = self._generate_subjects()
        classes = self._generate_classes()
        rooms = self._generate_rooms(classes)
        teachers, qualifications = self._generate_teachers(subjects)
        return Catalog(
            classes=classes,
            subjects=subjects,
            teachers=teachers,
            rooms=rooms,
            time_periods=self._generate_time_periods(),
            class_subjects=self._generate_class_subjects(classes, subjects, rooms),
            teacher_subjects=qualifications,
            constraints=self._generate_constraints(rooms),
        )

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, catalog: Catalog) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Demo-Daten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        part_time = sum(1 for t in catalog.teachers if not t.is_fully_available)
        need = sum(s.weekly_hours for s in catalog.subjects)
        table.add_row("Fächer", str(len(catalog.subjects)), f"{need} Std./Woche je Klasse")
        table.add_row("Klassen", str(len(catalog.classes)),
                      f"{len({c.level for c in catalog.classes})} Jahrgänge")
        table.add_row("Räume", str(len(catalog.rooms)),
                      f"{sum(1 for r in catalog.rooms if not r.is_available)} gesperrt")
        table.add_row("Lehrkräfte", str(len(catalog.teachers)),
                      f"{part_time} Teilzeit, {len(catalog.teachers) - part_time} Vollzeit")
        table.add_row("Perioden", str(len(catalog.schedulable_periods)),
                      f"{len(catalog.time_periods) - len(catalog.schedulable_periods)} Pausen")
        table.add_row("Constraints", str(len(catalog.constraints)),
                      f"{sum(1 for c in catalog.constraints if c.is_active)} aktiv")

        console.print(table)
