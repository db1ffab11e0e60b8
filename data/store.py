"""Datenquellen für den Generator.

StaticCatalogSource: Katalog im Speicher (Tests, Demo).
TimetableStore:      JSON-Datei mit Katalog + Stundenplan-Einträgen.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from models.catalog import Catalog
from models.timetable import GeneratedEntry
from solver.generator import GenerationResult

logger = logging.getLogger(__name__)


class StaticCatalogSource:
    """Liefert bei jedem Aufruf eine eigene Kopie des Katalogs."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def load_catalog(self) -> Catalog:
        return self._catalog.model_copy(deep=True)


class TimetableStore(BaseModel):
    """Persistenter Datenbestand: Stammdaten + aktueller Stundenplan.

    Manuell angelegte Einträge (is_generated=False) überstehen eine
    Neugenerierung, generierte werden ersetzt.
    """

    catalog: Catalog = Field(default_factory=Catalog)
    entries: list[GeneratedEntry] = []
    last_generated: Optional[datetime] = None

    def load_catalog(self) -> Catalog:
        return self.catalog.model_copy(deep=True)

    @property
    def generated_entries(self) -> list[GeneratedEntry]:
        return [e for e in self.entries if e.is_generated]

    @property
    def manual_entries(self) -> list[GeneratedEntry]:
        return [e for e in self.entries if not e.is_generated]

    def clear_generated_entries(self) -> int:
        """Entfernt alle generierten Einträge, gibt deren Anzahl zurück."""
        removed = len(self.generated_entries)
        self.entries = self.manual_entries
        return removed

    def apply_result(self, result: GenerationResult) -> None:
        """Übernimmt ein erfolgreiches Ergebnis und setzt last_generated."""
        if not result.success:
            raise ValueError("Fehlgeschlagenes Ergebnis kann nicht übernommen werden")
        removed = self.clear_generated_entries()
        self.entries.extend(result.entries)
        self.last_generated = datetime.now()
        logger.info(
            f"Stundenplan aktualisiert: {removed} alte Einträge ersetzt, "
            f"{len(result.entries)} neue übernommen"
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den Datenbestand als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "TimetableStore":
        """Lädt einen Datenbestand aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Datenbestand nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
