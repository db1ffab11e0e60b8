from config.schema import AppConfig, LoggingConfig, SchedulingOptions, TeacherDefaults
from models.time_period import DayOfWeek


# Standard-Tagesraster: (Name, Beginn, Ende, Pause?)
DEFAULT_DAY_GRID: list[tuple[str, str, str, bool]] = [
    ("1. Stunde",    "08:00", "08:45", False),
    ("2. Stunde",    "09:00", "09:45", False),
    ("Große Pause",  "09:45", "10:05", True),
    ("3. Stunde",    "10:05", "10:50", False),
    ("4. Stunde",    "11:00", "11:45", False),
    ("5. Stunde",    "12:00", "12:45", False),
    ("6. Stunde",    "13:00", "13:45", False),
]

SCHOOL_DAYS: list[DayOfWeek] = list(DayOfWeek)


# Fach → (Kürzel, Wochenstunden, Labor?)
SUBJECT_METADATA: dict[str, tuple[str, int, bool]] = {
    "Deutsch":    ("DE", 4, False),
    "Mathematik": ("MA", 4, False),
    "Englisch":   ("EN", 3, False),
    "Biologie":   ("BI", 2, True),
    "Chemie":     ("CH", 2, True),
    "Physik":     ("PH", 2, True),
    "Geschichte": ("GE", 2, False),
    "Erdkunde":   ("EK", 1, False),
    "Kunst":      ("KU", 1, False),
    "Sport":      ("SP", 2, False),
}


def default_app_config() -> AppConfig:
    """Standard-Konfiguration (wird verwendet, solange keine YAML-Datei existiert)."""
    return AppConfig(
        school_name="Muster-Schule",
        academic_year="2026/27",
        term_name="1. Halbjahr",
        data_path="output/timetable_store.json",
        options=SchedulingOptions(),
        teacher_defaults=TeacherDefaults(),
        logging=LoggingConfig(),
    )
