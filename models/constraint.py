"""Datenmodell für Planungs-Constraints (Pydantic v2).

Regeln sind ein getaggter Typ (Feld "kind"):
  - "none":   keine Regel hinterlegt (EmptyRule)
  - "custom": beliebige, noch nicht ausgewertete Nutzdaten (CustomRule)

Lose JSON-Objekte aus Altdaten werden beim Laden auf diese Varianten
abgebildet: {} / null → EmptyRule, sonst → CustomRule(payload=...).
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class ConstraintType(str, Enum):
    HARD = "hard"
    SOFT = "soft"


class ConstraintScope(str, Enum):
    SUBJECT = "subject"
    TEACHER = "teacher"
    CLASS = "class"
    ROOM = "room"
    GLOBAL = "global"


class EmptyRule(BaseModel):
    kind: Literal["none"] = "none"


class CustomRule(BaseModel):
    kind: Literal["custom"] = "custom"
    payload: dict[str, Any] = {}


ConstraintRule = Annotated[Union[EmptyRule, CustomRule], Field(discriminator="kind")]


class Constraint(BaseModel):
    """Eine harte oder weiche Regel, eingeschränkt auf einen Geltungsbereich."""

    id: int
    name: str
    description: Optional[str] = None
    type: ConstraintType
    scope: ConstraintScope
    target_id: Optional[int] = None    # ID der Lehrkraft/Klasse/... je nach scope
    rule: ConstraintRule = Field(default_factory=EmptyRule)
    priority: int = Field(5, ge=1, le=10)
    is_active: bool = True

    @field_validator("rule", mode="before")
    @classmethod
    def _coerce_rule(cls, v: Any) -> Any:
        if v is None or v == {}:
            return {"kind": "none"}
        if isinstance(v, dict) and "kind" not in v:
            return {"kind": "custom", "payload": v}
        return v

    @property
    def is_targeted(self) -> bool:
        """True wenn die Regel auf eine konkrete Entität zielt."""
        return self.scope != ConstraintScope.GLOBAL and self.target_id is not None
