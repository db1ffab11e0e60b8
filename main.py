"""Stundenplan-Generator: Haupt-CLI.

Verwendung:
  python main.py config init              Standard-Konfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py demo                     Demo-Datensatz erzeugen und speichern
  python main.py validate                 Machbarkeits-Check (+ Plan-Validierung)
  python main.py generate                 Stundenplan generieren und übernehmen
  python main.py generate --dry-run       Nur generieren, nichts speichern
  python main.py timetable --class-id 1   Plan einer Klasse anzeigen
  python main.py timetable --teacher-id 3 Plan einer Lehrkraft anzeigen
  python main.py workload                 Auslastung der Lehrkräfte
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config():
    """Lädt die Konfiguration (Standardwerte, falls keine Datei existiert)."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        return mgr, mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _data_path(config, data: Optional[str]) -> Path:
    return Path(data) if data else Path(config.data_path)


def _load_store_or_abort(path: Path):
    """Lädt den Datenbestand oder bricht mit Fehlermeldung ab."""
    from data.store import TimetableStore

    if not path.exists():
        console.print(
            f"[red]Kein Datenbestand gefunden: {path}[/red]\n"
            "Verwenden Sie zunächst [bold]python main.py demo[/bold]."
        )
        sys.exit(1)
    try:
        return TimetableStore.load_json(path)
    except ValueError as e:
        console.print(f"[red]Datenbestand ungültig: {path}[/red]\n{e}")
        sys.exit(1)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration überschreiben.")
def config_init(force: bool):
    """Legt die Standard-Konfiguration als YAML-Datei an."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return
    mgr.save(default_app_config())


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    mgr, config = _load_config()
    source = "Standardwerte" if mgr.first_run_check() else str(mgr.DEFAULT_CONFIG)

    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  "
        f"{config.academic_year}  |  {config.term_name}\n"
        f"[dim]Quelle: {source} | Daten: {config.data_path}[/dim]",
        title="Schulkonfiguration",
        border_style="cyan",
    ))

    table = Table(title="Generierungs-Optionen", box=box.ROUNDED)
    table.add_column("Option")
    table.add_column("Wert")
    for name, value in config.options.model_dump().items():
        table.add_row(name, "[green]ja[/green]" if value else "[dim]nein[/dim]")
    console.print(table)

    td = config.teacher_defaults
    console.print(
        f"\n[bold]Lehrkräfte:[/bold] max {td.max_classes_per_day}/Tag, "
        f"{td.max_classes_per_week}/Woche | "
        f"[bold]Log-Level:[/bold] {config.logging.level}"
    )


# ─── DEMO ─────────────────────────────────────────────────────────────────────

@click.command("demo")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--classes", "num_classes", default=6, type=click.IntRange(1, 20),
              help="Anzahl Klassen.")
@click.option("--data", default=None, help="Pfad zum Datenbestand (JSON).")
@click.option("--validate/--no-validate", "run_validate", default=True,
              help="Machbarkeits-Check nach Generierung.")
def cmd_demo(seed: int, num_classes: int, data: Optional[str], run_validate: bool):
    """Erzeugt einen Demo-Katalog und speichert ihn als Datenbestand."""
    from data.demo_data import DemoCatalogGenerator
    from data.store import TimetableStore

    mgr, config = _load_config()
    console.print("[bold]Demo-Daten werden generiert...[/bold]")
    gen = DemoCatalogGenerator(config, seed=seed, num_classes=num_classes)
    catalog = gen.generate()
    gen.print_summary(catalog)

    if run_validate:
        catalog.validate_feasibility().print_rich()

    path = _data_path(config, data)
    TimetableStore(catalog=catalog).save_json(path)
    console.print(f"[green]✓[/green] Datenbestand gespeichert: {path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.option("--data", default=None, help="Pfad zum Datenbestand (JSON).")
def cmd_validate(data: Optional[str]):
    """Machbarkeits-Check des Katalogs und Prüfung des aktuellen Plans."""
    from analysis.schedule_validator import ScheduleValidator

    mgr, config = _load_config()
    store = _load_store_or_abort(_data_path(config, data))

    console.print(f"\n{store.catalog.summary()}\n")
    report = store.catalog.validate_feasibility()
    report.print_rich()

    plan_ok = True
    if store.entries:
        plan_report = ScheduleValidator().validate(store.entries, store.catalog)
        plan_report.print_rich()
        plan_ok = plan_report.is_valid

    sys.exit(0 if report.is_feasible and plan_ok else 1)


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--data", default=None, help="Pfad zum Datenbestand (JSON).")
@click.option("--morning/--no-morning", "prioritize_morning", default=None,
              help="Vormittags-Perioden zuerst belegen.")
@click.option("--hard/--no-hard", "enforce_hard", default=None,
              help="Harte Constraints durchsetzen.")
@click.option("--soft/--no-soft", "respect_soft", default=None,
              help="Weiche Constraints berücksichtigen.")
@click.option("--optimize-workload/--no-optimize-workload", default=None,
              help="Reserviert, ohne Wirkung.")
@click.option("--minimize-room-changes/--no-minimize-room-changes", default=None,
              help="Reserviert, ohne Wirkung.")
@click.option("--dry-run", is_flag=True, default=False,
              help="Ergebnis nur anzeigen, nicht speichern.")
@click.option("--output", default=None, help="Ergebnis zusätzlich als JSON speichern.")
def cmd_generate(
    data: Optional[str],
    prioritize_morning: Optional[bool],
    enforce_hard: Optional[bool],
    respect_soft: Optional[bool],
    optimize_workload: Optional[bool],
    minimize_room_changes: Optional[bool],
    dry_run: bool,
    output: Optional[str],
):
    """Generiert den Wochenplan und übernimmt ihn in den Datenbestand."""
    from solver.generator import ScheduleGenerator

    mgr, config = _load_config()
    path = _data_path(config, data)
    store = _load_store_or_abort(path)

    overrides = {
        "prioritize_morning_classes": prioritize_morning,
        "enforce_hard_constraints": enforce_hard,
        "respect_soft_constraints": respect_soft,
        "optimize_teacher_workload": optimize_workload,
        "minimize_room_changes": minimize_room_changes,
    }
    options = config.options.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    result = ScheduleGenerator(store).generate(options)

    stats = result.stats
    color = "green" if result.success and not result.conflicts else (
        "yellow" if result.success else "red"
    )
    console.print(Panel(
        f"Status: [bold {color}]{'ERFOLG' if result.success else 'FEHLGESCHLAGEN'}"
        f"[/bold {color}]\n"
        f"Klassen: {stats.total_classes} | Einträge: {stats.total_entries} | "
        f"Aufgelöste Konflikte: {stats.conflicts_resolved}",
        title="Generierung",
        border_style="cyan",
    ))
    for message in result.conflicts:
        console.print(f"  [yellow]• {message}[/yellow]")
    for message in result.errors or []:
        console.print(f"  [red]• {message}[/red]")

    if output:
        result.save_json(Path(output))
        console.print(f"[green]✓[/green] Ergebnis gespeichert: {output}")

    if not result.success:
        sys.exit(1)
    if dry_run:
        console.print("[dim]Dry-Run: Datenbestand unverändert.[/dim]")
        return

    store.apply_result(result)
    store.save_json(path)
    console.print(f"[green]✓[/green] Stundenplan übernommen: {path}")


# ─── TIMETABLE ────────────────────────────────────────────────────────────────

@click.command("timetable")
@click.option("--data", default=None, help="Pfad zum Datenbestand (JSON).")
@click.option("--class-id", type=int, default=None, help="Plan dieser Klasse.")
@click.option("--teacher-id", type=int, default=None, help="Plan dieser Lehrkraft.")
def cmd_timetable(data: Optional[str], class_id: Optional[int], teacher_id: Optional[int]):
    """Zeigt den Wochenplan einer Klasse oder Lehrkraft als Raster."""
    from models.time_period import DayOfWeek, to_minutes

    if (class_id is None) == (teacher_id is None):
        console.print("[red]Genau eine von --class-id oder --teacher-id angeben.[/red]")
        sys.exit(1)

    mgr, config = _load_config()
    store = _load_store_or_abort(_data_path(config, data))
    catalog = store.catalog

    classes = {c.id: c for c in catalog.classes}
    teachers = {t.id: t for t in catalog.teachers}
    subjects = {s.id: s for s in catalog.subjects}
    rooms = {r.id: r for r in catalog.rooms}
    periods = {p.id: p for p in catalog.time_periods}

    if class_id is not None:
        if class_id not in classes:
            console.print(f"[red]Unbekannte Klasse: {class_id}[/red]")
            sys.exit(1)
        entries = [e for e in store.entries if e.class_id == class_id]
        title = f"Klasse {classes[class_id].name}"
    else:
        if teacher_id not in teachers:
            console.print(f"[red]Unbekannte Lehrkraft: {teacher_id}[/red]")
            sys.exit(1)
        entries = [e for e in store.entries if e.teacher_id == teacher_id]
        title = f"Lehrkraft {teachers[teacher_id].name}"

    cells: dict[tuple, str] = {}
    for e in entries:
        period = periods[e.time_period_id]
        other = teachers[e.teacher_id].name if class_id is not None else classes[e.class_id].name
        room = rooms[e.room_id].name if e.room_id is not None else "–"
        cells[(period.day_of_week, period.start_time)] = (
            f"[bold]{subjects[e.subject_id].code}[/bold]\n{other}\n[dim]{room}[/dim]"
        )

    rows = sorted(
        {(p.start_time, p.end_time, p.name, p.is_break) for p in catalog.time_periods},
        key=lambda row: (to_minutes(row[0]), to_minutes(row[1]), row[2]),
    )
    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="bold", width=13)
    for day in DayOfWeek:
        table.add_column(day.short_name, width=16)
    for start, end, name, is_break in rows:
        if is_break:
            table.add_row(f"{start}-{end}", *["[dim]Pause[/dim]"] * len(DayOfWeek))
            continue
        table.add_row(f"{start}-{end}", *[cells.get((day, start), "") for day in DayOfWeek])
    console.print(table)
    if store.last_generated:
        console.print(f"[dim]Zuletzt generiert: {store.last_generated:%d.%m.%Y %H:%M}[/dim]")


# ─── WORKLOAD ─────────────────────────────────────────────────────────────────

@click.command("workload")
@click.option("--data", default=None, help="Pfad zum Datenbestand (JSON).")
def cmd_workload(data: Optional[str]):
    """Zeigt die Auslastung aller Lehrkräfte im aktuellen Plan."""
    from analysis.workload_report import print_workload, workload_summary

    mgr, config = _load_config()
    store = _load_store_or_abort(_data_path(config, data))
    print_workload(workload_summary(store.entries, store.catalog))


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Log-Level (überschreibt die Konfiguration).")
def cli(log_level: Optional[str]):
    """Stundenplan-Generator: Wochenpläne aus Stammdaten erzeugen.

    Starten Sie mit: python main.py demo
    """
    if log_level is None:
        mgr, config = _load_config()
        log_level = config.logging.level
    _setup_logging(log_level.upper())


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_demo)
cli.add_command(cmd_validate)
cli.add_command(cmd_generate)
cli.add_command(cmd_timetable)
cli.add_command(cmd_workload)


if __name__ == "__main__":
    main()
