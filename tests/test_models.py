"""Tests für die Datenmodelle (Validierung beim Laden, Katalog, Persistenz)."""

import pytest
from pydantic import ValidationError

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


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def make_catalog(**overrides) -> Catalog:
    """Zwei Klassen, zwei Fächer, zwei Lehrkräfte, ein Raum, drei Perioden."""
    fields = dict(
        classes=[
            SchoolClass(id=1, name="5a", level="Klasse 5", section="a"),
            SchoolClass(id=2, name="5b", level="Klasse 5", section="b"),
        ],
        subjects=[
            Subject(id=1, name="Mathematik", code="MA", weekly_hours=2),
            Subject(id=2, name="Chemie", code="CH", weekly_hours=1, requires_lab=True),
        ],
        teachers=[
            Teacher(id=1, name="Müller, Anna"),
            Teacher(id=2, name="Schmidt, Klaus"),
        ],
        rooms=[Room(id=1, name="R101", capacity=30)],
        time_periods=[
            TimePeriod(id=1, name="1. Stunde", start_time="08:00", end_time="08:45",
                       day_of_week=DayOfWeek.MONDAY, order_index=1),
            TimePeriod(id=2, name="Pause", start_time="08:45", end_time="09:00",
                       day_of_week=DayOfWeek.MONDAY, is_break=True, order_index=2),
            TimePeriod(id=3, name="2. Stunde", start_time="09:00", end_time="09:45",
                       day_of_week=DayOfWeek.MONDAY, order_index=3),
        ],
        class_subjects=[
            ClassSubjectAssignment(class_id=1, subject_id=1),
            ClassSubjectAssignment(class_id=2, subject_id=2),
        ],
        teacher_subjects=[
            TeacherSubjectAssignment(teacher_id=2, subject_id=1),
            TeacherSubjectAssignment(teacher_id=1, subject_id=1),
            TeacherSubjectAssignment(teacher_id=1, subject_id=2),
        ],
    )
    fields.update(overrides)
    return Catalog(**fields)


# ─── Zeitperioden ─────────────────────────────────────────────────────────────

class TestTimePeriod:
    def test_hours_and_label(self):
        p = TimePeriod(id=1, name="3. Stunde", start_time="10:05", end_time="10:50",
                       day_of_week="wednesday", order_index=3)
        assert p.day_of_week == DayOfWeek.WEDNESDAY
        assert p.start_hour == 10
        assert p.end_hour == 10
        assert p.label == "Mi 10:05 (3. Stunde)"

    @pytest.mark.parametrize("value", ["24:00", "08:60", "8:5", "0800", ""])
    def test_invalid_time_format(self, value):
        with pytest.raises(ValidationError):
            TimePeriod(id=1, name="x", start_time=value, end_time="23:00",
                       day_of_week="monday", order_index=1)

    def test_single_digit_hour(self):
        p = TimePeriod(id=1, name="1. Stunde", start_time="8:00", end_time="8:45",
                       day_of_week="monday", order_index=1)
        assert p.start_hour == 8
        assert p.end_hour == 8
        assert p.label == "Mo 8:00 (1. Stunde)"

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError):
            TimePeriod(id=1, name="x", start_time="09:00", end_time="09:00",
                       day_of_week="monday", order_index=1)

    def test_weekend_rejected(self):
        with pytest.raises(ValidationError):
            TimePeriod(id=1, name="x", start_time="08:00", end_time="09:00",
                       day_of_week="saturday", order_index=1)


# ─── Lehrkräfte ───────────────────────────────────────────────────────────────

class TestTeacher:
    def test_defaults(self):
        t = Teacher(id=1, name="Weber, Eva")
        assert t.max_classes_per_day == 6
        assert t.max_classes_per_week == 30
        assert t.is_fully_available

    def test_availability_parsed_from_json(self):
        t = Teacher.model_validate({
            "id": 1,
            "name": "Weber, Eva",
            "availability": {"monday": [{"start": "08:00", "end": "12:00"}]},
        })
        windows = t.availability[DayOfWeek.MONDAY]
        assert windows == [AvailabilityWindow(start="08:00", end="12:00")]
        assert windows[0].end_hour == 12
        assert not t.is_fully_available

    def test_invalid_window(self):
        with pytest.raises(ValidationError):
            Teacher(id=1, name="x", availability={"monday": [{"start": "12:00", "end": "08:00"}]})

    def test_daily_cap_above_weekly_cap_allowed(self):
        t = Teacher(id=1, name="x", max_classes_per_week=4)
        assert t.max_classes_per_day == 6
        assert t.max_classes_per_week == 4

    @pytest.mark.parametrize("field", ["max_classes_per_day", "max_classes_per_week"])
    def test_caps_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Teacher(id=1, name="x", **{field: 0})


# ─── Räume, Fächer, Constraints ───────────────────────────────────────────────

class TestSimpleModels:
    def test_room_type_from_string(self):
        room = Room(id=1, name="Labor", type="laboratory", capacity=24)
        assert room.type == RoomType.LABORATORY
        assert room.is_available

    def test_room_needs_capacity(self):
        with pytest.raises(ValidationError):
            Room(id=1, name="R", capacity=0)

    def test_subject_defaults(self):
        s = Subject(id=1, name="Deutsch", code="DE")
        assert s.weekly_hours == 3
        assert not s.requires_lab

    def test_negative_weekly_hours(self):
        with pytest.raises(ValidationError):
            Subject(id=1, name="Deutsch", code="DE", weekly_hours=-1)


class TestConstraint:
    def _make(self, **kwargs) -> Constraint:
        fields = dict(id=1, name="c", type="hard", scope="teacher", target_id=3)
        fields.update(kwargs)
        return Constraint(**fields)

    def test_defaults(self):
        c = self._make()
        assert c.priority == 5
        assert c.is_active
        assert isinstance(c.rule, EmptyRule)
        assert c.type == ConstraintType.HARD
        assert c.is_targeted

    @pytest.mark.parametrize("raw", [None, {}, {"kind": "none"}])
    def test_empty_rule_coercion(self, raw):
        assert isinstance(self._make(rule=raw).rule, EmptyRule)

    def test_loose_payload_becomes_custom_rule(self):
        c = self._make(rule={"max_per_day": 2})
        assert isinstance(c.rule, CustomRule)
        assert c.rule.payload == {"max_per_day": 2}

    def test_tagged_custom_rule(self):
        c = self._make(rule={"kind": "custom", "payload": {"x": 1}})
        assert c.rule == CustomRule(payload={"x": 1})

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            self._make(rule={"kind": "time_window"})

    @pytest.mark.parametrize("priority", [0, 11])
    def test_priority_range(self, priority):
        with pytest.raises(ValidationError):
            self._make(priority=priority)

    def test_global_is_never_targeted(self):
        assert not self._make(scope=ConstraintScope.GLOBAL, target_id=3).is_targeted
        assert not self._make(target_id=None).is_targeted


# ─── Katalog ──────────────────────────────────────────────────────────────────

class TestCatalog:
    def test_valid_catalog(self):
        catalog = make_catalog()
        assert [p.id for p in catalog.schedulable_periods] == [1, 3]
        assert catalog.eligible_teacher_ids(1) == [2, 1]
        assert catalog.eligible_teacher_ids(99) == []

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError, match="doppelte IDs"):
            make_catalog(rooms=[
                Room(id=1, name="R101", capacity=30),
                Room(id=1, name="R102", capacity=30),
            ])

    @pytest.mark.parametrize("assignment", [
        ClassSubjectAssignment(class_id=9, subject_id=1),
        ClassSubjectAssignment(class_id=1, subject_id=9),
        ClassSubjectAssignment(class_id=1, subject_id=1, teacher_id=9),
        ClassSubjectAssignment(class_id=1, subject_id=1, preferred_room_id=9),
    ])
    def test_dangling_class_subject_reference(self, assignment):
        with pytest.raises(ValidationError):
            make_catalog(class_subjects=[assignment])

    def test_dangling_teacher_subject_reference(self):
        with pytest.raises(ValidationError):
            make_catalog(teacher_subjects=[TeacherSubjectAssignment(teacher_id=9, subject_id=1)])

    def test_summary(self):
        text = make_catalog().summary()
        assert "Klassen: 2" in text
        assert "Perioden: 2 planbar, 1 Pausen" in text

    def test_json_round_trip(self, tmp_path):
        catalog = make_catalog()
        path = tmp_path / "catalog.json"
        catalog.save_json(path)
        assert Catalog.load_json(path) == catalog

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Catalog.load_json(tmp_path / "fehlt.json")


class TestFeasibility:
    def test_lab_warning_and_tight_rooms(self):
        report = make_catalog().validate_feasibility()
        # 3 Std. Bedarf bei 1 Raum × 2 Perioden
        assert not report.is_feasible
        assert any("Raumengpass" in e for e in report.errors)
        assert any("Labor" in w for w in report.warnings)

    def test_feasible_catalog(self):
        catalog = make_catalog(
            rooms=[
                Room(id=1, name="R101", capacity=30),
                Room(id=2, name="Labor", type=RoomType.LABORATORY, capacity=30),
            ],
        )
        report = catalog.validate_feasibility()
        assert report.is_feasible
        assert report.errors == []

    def test_subject_without_teacher(self):
        report = make_catalog(teacher_subjects=[]).validate_feasibility()
        assert not report.is_feasible
        assert any("Keine befähigte Lehrkraft" in e for e in report.errors)

    def test_class_demand_above_periods(self):
        catalog = make_catalog(
            subjects=[
                Subject(id=1, name="Mathematik", code="MA", weekly_hours=5),
                Subject(id=2, name="Chemie", code="CH", weekly_hours=1),
            ],
        )
        report = catalog.validate_feasibility()
        assert any("5a" in e and "planbare Perioden" in e for e in report.errors)

    def test_no_assignments(self):
        report = make_catalog(class_subjects=[]).validate_feasibility()
        assert not report.is_feasible

    def test_teacher_without_matching_availability(self):
        teachers = [
            Teacher(id=1, name="Müller, Anna"),
            Teacher(id=2, name="Schmidt, Klaus", availability={
                DayOfWeek.FRIDAY: [AvailabilityWindow(start="08:00", end="12:00")],
            }),
        ]
        report = make_catalog(teachers=teachers).validate_feasibility()
        assert any("Schmidt" in w and "Verfügbarkeit" in w for w in report.warnings)

    def test_preferred_teacher_not_qualified(self):
        catalog = make_catalog(class_subjects=[
            ClassSubjectAssignment(class_id=2, subject_id=2, teacher_id=2),
        ])
        report = catalog.validate_feasibility()
        assert any("nicht befähigt" in w for w in report.warnings)
