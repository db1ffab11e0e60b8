from pydantic import BaseModel, Field, field_validator


# ─── GENERIERUNGS-OPTIONEN ───

class SchedulingOptions(BaseModel):
    """Schalter für einen Generierungslauf.

    optimize_teacher_workload und minimize_room_changes werden akzeptiert,
    beeinflussen die Slot-Auswahl aber (noch) nicht.
    """
    # Reserviert: arbeitslast-bewusste Reihung der Kandidaten
    optimize_teacher_workload: bool = Field(False,
        description="Reserviert: Lehrer-Auslastung optimieren (ohne Wirkung)")
    # Reserviert: Raumwechsel minimieren
    minimize_room_changes: bool = Field(False,
        description="Reserviert: Raumwechsel minimieren (ohne Wirkung)")
    # Perioden nach Beginn-Stunde statt nach order_index durchsuchen
    prioritize_morning_classes: bool = Field(False,
        description="Vormittags-Perioden zuerst belegen")
    # Harte Constraints; Prüfung entfällt nur, wenn auch die weichen aus sind
    enforce_hard_constraints: bool = Field(True,
        description="Harte Constraints durchsetzen")
    # Weiche Constraints auswerten (blockieren nie)
    respect_soft_constraints: bool = Field(True,
        description="Weiche Constraints berücksichtigen")


# ─── LEHRKRÄFTE ───

class TeacherDefaults(BaseModel):
    """Standard-Obergrenzen für neu angelegte Lehrkräfte."""
    # Max. Unterrichtsperioden pro Tag
    max_classes_per_day: int = Field(6, ge=1, le=12,
        description="Max Perioden pro Tag (Default)")
    # Max. Unterrichtsperioden pro Woche
    max_classes_per_week: int = Field(30, ge=1, le=60,
        description="Max Perioden pro Woche (Default)")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    """Log-Ausgabe der CLI."""
    level: str = Field("INFO", description="DEBUG, INFO, WARNING oder ERROR")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unbekanntes Log-Level: {v}")
        return v


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration der Anwendung."""
    # Name der Schule
    school_name: str = Field("Muster-Schule", description="Name der Schule")
    # Schuljahr, z.B. "2026/27"
    academic_year: str = Field("2026/27")
    # Halbjahr / Term
    term_name: str = Field("1. Halbjahr")
    # Pfad zum JSON-Datenbestand (Katalog + Stundenplan)
    data_path: str = Field("output/timetable_store.json",
        description="Pfad zum JSON-Datenbestand")
    # Standard-Optionen für 'generate'
    options: SchedulingOptions = Field(default_factory=SchedulingOptions)
    # Standard-Obergrenzen für Lehrkräfte (Demo-Daten)
    teacher_defaults: TeacherDefaults = Field(default_factory=TeacherDefaults)
    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
