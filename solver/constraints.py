"""Auswertung harter und weicher Constraints für einzelne Einträge.

Harte Constraints blockieren einen Eintrag, weiche werden nur protokolliert.
Die Prüfung entfällt ganz, wenn beide Schalter aus sind; sonst werden harte
Constraints immer ausgewertet.

Regelsemantik:
  - EmptyRule auf einer gezielten Regel (scope + target_id) schließt das
    Ziel aus, z.B. "Lehrkraft 7 nicht einplanen".
  - EmptyRule ohne Ziel (oder scope=global) ist immer erfüllt.
  - CustomRule ist ein Erweiterungspunkt und gilt derzeit als erfüllt.
"""

import logging
from typing import Optional

from config.schema import SchedulingOptions
from models.constraint import Constraint, ConstraintScope, ConstraintType, CustomRule
from models.timetable import GeneratedEntry

logger = logging.getLogger(__name__)


def _scope_value(entry: GeneratedEntry, scope: ConstraintScope) -> Optional[int]:
    if scope == ConstraintScope.TEACHER:
        return entry.teacher_id
    if scope == ConstraintScope.CLASS:
        return entry.class_id
    if scope == ConstraintScope.SUBJECT:
        return entry.subject_id
    if scope == ConstraintScope.ROOM:
        return entry.room_id
    return None


class ConstraintValidator:
    """Prüft Einträge gegen die aktiven Constraints eines Katalogs."""

    def __init__(self, constraints: list[Constraint], options: SchedulingOptions) -> None:
        self.options = options
        self.constraints = [c for c in constraints if c.is_active]

    def applies(self, constraint: Constraint, entry: GeneratedEntry) -> bool:
        """Gezielte Regeln gelten nur, wenn das Ziel zum Eintrag passt."""
        if not constraint.is_targeted:
            return True
        return _scope_value(entry, constraint.scope) == constraint.target_id

    def _rule_satisfied(self, constraint: Constraint, entry: GeneratedEntry) -> bool:
        if isinstance(constraint.rule, CustomRule):
            return True
        return not constraint.is_targeted

    def is_valid(self, entry: GeneratedEntry) -> bool:
        """True wenn kein anwendbarer harter Constraint verletzt ist."""
        enforce_hard = self.options.enforce_hard_constraints
        respect_soft = self.options.respect_soft_constraints
        if not enforce_hard and not respect_soft:
            return True

        for constraint in self.constraints:
            if constraint.type == ConstraintType.SOFT and not respect_soft:
                continue
            if not self.applies(constraint, entry):
                continue
            if self._rule_satisfied(constraint, entry):
                continue

            if constraint.type == ConstraintType.HARD:
                logger.debug(
                    f"Harter Constraint '{constraint.name}' verletzt "
                    f"(Klasse {entry.class_id}, Fach {entry.subject_id}, "
                    f"Periode {entry.time_period_id})"
                )
                return False
            logger.debug(
                f"Weicher Constraint '{constraint.name}' nicht erfüllt "
                f"(Priorität {constraint.priority}) – Eintrag bleibt zulässig"
            )
        return True
