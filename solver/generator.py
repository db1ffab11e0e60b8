"""Stundenplan-Generator (Greedy, First-Fit mit lokaler Konfliktauflösung).

Ablauf pro Lauf:
  1. Katalog einmal laden, frischen RunContext anlegen
  2. Klasse-Fach-Zuordnungen in Katalog-Reihenfolge abarbeiten
  3. Pro Zuordnung weekly_hours Slots suchen (SlotFinder)
  4. Jeden Kandidaten prüfen (Konflikte, Constraints, Obergrenzen)
  5. Bei Verstoß: ConflictResolver, erneute Prüfung, sonst Meldung
"""

import logging
import time
from pathlib import Path
from typing import Optional, Protocol

from pydantic import BaseModel

from config.schema import SchedulingOptions
from models.assignment import ClassSubjectAssignment
from models.catalog import Catalog
from models.timetable import GeneratedEntry
from solver.conflicts import ConflictDetector, ConflictResolver
from solver.constraints import ConstraintValidator
from solver.context import RunContext
from solver.slot_finder import CandidateSlot, SlotFinder

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class GenerationStats(BaseModel):
    total_classes: int = 0
    total_entries: int = 0
    conflicts_resolved: int = 0


class GenerationResult(BaseModel):
    """Ergebnis eines Generierungslaufs.

    success=True heißt: der Lauf wurde vollständig durchgeführt. Nicht
    planbare Stunden stehen dann als Meldung in conflicts.
    """

    success: bool
    entries: list[GeneratedEntry]
    stats: GenerationStats
    conflicts: list[str]
    errors: Optional[list[str]] = None

    def get_class_entries(self, class_id: int) -> list[GeneratedEntry]:
        return [e for e in self.entries if e.class_id == class_id]

    def get_teacher_entries(self, teacher_id: int) -> list[GeneratedEntry]:
        return [e for e in self.entries if e.teacher_id == teacher_id]

    def save_json(self, path: Path) -> None:
        """Speichert das Ergebnis als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def failure(cls, message: str) -> "GenerationResult":
        return cls(
            success=False,
            entries=[],
            stats=GenerationStats(),
            conflicts=[],
            errors=[message],
        )


class CatalogSource(Protocol):
    def load_catalog(self) -> Catalog: ...


# ─── Generator ────────────────────────────────────────────────────────────────

class ScheduleGenerator:
    """Erzeugt einen Wochenplan aus einem Katalog-Schnappschuss.

    Verwendung:
        generator = ScheduleGenerator(StaticCatalogSource(catalog))
        result = generator.generate(SchedulingOptions(prioritize_morning_classes=True))

    Die Instanz hält nur ihre Datenquelle; gleichzeitige Läufe teilen
    keinen Zustand.
    """

    def __init__(self, source: CatalogSource) -> None:
        self.source = source

    def generate(self, options: Optional[SchedulingOptions] = None) -> GenerationResult:
        options = options or SchedulingOptions()
        t0 = time.time()
        try:
            catalog = self.source.load_catalog()
            if not catalog.class_subjects:
                logger.error("Keine Klasse-Fach-Zuordnungen – Generierung abgebrochen")
                return GenerationResult.failure(
                    "Keine Klasse-Fach-Zuordnungen gefunden. "
                    "Bitte zuerst Fächer den Klassen zuordnen."
                )

            ctx = RunContext(catalog, options)
            result = self._run(ctx)
        except Exception as exc:
            logger.exception("Generierung fehlgeschlagen")
            return GenerationResult.failure(str(exc) or type(exc).__name__)

        logger.info(
            f"Generierung beendet | Zeit: {time.time() - t0:.2f}s | "
            f"Einträge: {result.stats.total_entries} | "
            f"Aufgelöst: {result.stats.conflicts_resolved} | "
            f"Meldungen: {len(result.conflicts)}"
        )
        return result

    # ─── Hauptschleife ────────────────────────────────────────────────────────

    def _run(self, ctx: RunContext) -> GenerationResult:
        finder = SlotFinder(ctx)
        detector = ConflictDetector()
        resolver = ConflictResolver(ctx, detector)
        validator = ConstraintValidator(ctx.catalog.constraints, ctx.options)

        conflicts: list[str] = []
        conflicts_resolved = 0

        logger.info(
            f"Starte Generierung: {len(ctx.catalog.class_subjects)} Zuordnungen, "
            f"{len(ctx.ordered_periods)} planbare Perioden"
        )

        for assignment in ctx.catalog.class_subjects:
            subject = ctx.subjects[assignment.subject_id]
            school_class = ctx.classes[assignment.class_id]
            periods_needed = subject.weekly_hours

            slots = finder.find(assignment, periods_needed)
            if len(slots) < periods_needed:
                message = (
                    f"Nicht alle {periods_needed} Stunden für {subject.name} "
                    f"in {school_class.name} planbar ({len(slots)} gefunden)"
                )
                logger.warning(message)
                conflicts.append(message)

            for slot in slots:
                entry = self._build_entry(assignment, slot)
                if self._accepts(ctx, detector, validator, entry):
                    ctx.commit(entry)
                    continue

                resolved = resolver.resolve(entry, slot)
                if resolved is not None and self._accepts(ctx, detector, validator, resolved):
                    ctx.commit(resolved)
                    conflicts_resolved += 1
                    continue

                message = (
                    f"Unauflösbarer Konflikt für {subject.name} in "
                    f"{school_class.name} ({slot.time_period.label})"
                )
                logger.warning(message)
                conflicts.append(message)

        return GenerationResult(
            success=True,
            entries=list(ctx.entries),
            stats=GenerationStats(
                total_classes=len(ctx.catalog.classes),
                total_entries=len(ctx.entries),
                conflicts_resolved=conflicts_resolved,
            ),
            conflicts=conflicts,
        )

    @staticmethod
    def _build_entry(
        assignment: ClassSubjectAssignment, slot: CandidateSlot
    ) -> GeneratedEntry:
        teacher_id = assignment.teacher_id if assignment.teacher_id is not None else slot.teacher_id
        room_id = (
            assignment.preferred_room_id
            if assignment.preferred_room_id is not None
            else slot.room_id
        )
        return GeneratedEntry(
            class_id=assignment.class_id,
            subject_id=assignment.subject_id,
            teacher_id=teacher_id,
            room_id=room_id,
            time_period_id=slot.time_period.id,
        )

    @staticmethod
    def _accepts(
        ctx: RunContext,
        detector: ConflictDetector,
        validator: ConstraintValidator,
        entry: GeneratedEntry,
    ) -> bool:
        """Prüfung vor jeder Übernahme: Konflikte, Constraints, Obergrenzen."""
        if detector.check(entry, ctx.entries).has_conflict:
            return False
        if not validator.is_valid(entry):
            return False
        return ctx.within_caps(entry)
