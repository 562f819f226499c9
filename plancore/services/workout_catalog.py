"""Read-only workout template catalog.

Raw library entries come in two shapes (segments nested under "workout",
or a flat "structure" string). Every entry is normalized into one
WorkoutTemplate on retrieval so the rest of the pipeline only ever sees
the canonical shape. Lookups are positional and memoized per catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Optional

from plancore.errors import TemplateNotFoundError
from plancore.logging_config import get_logger
from plancore.models import WorkoutKind, WorkoutReference, parse_kind
from plancore.services.workout_library import WORKOUT_LIBRARY

logger = get_logger(__name__)

PHASE_ORDER: tuple[str, ...] = ("warmup", "main", "recovery", "cooldown")


@dataclass(frozen=True)
class WorkoutTemplate:
    name: str
    kind: WorkoutKind
    category: str
    description: str = ""
    structure: str = ""
    phases: tuple[tuple[str, str], ...] = ()
    repetitions: Optional[str] = None
    rep_distance: Optional[str] = None
    pace: Optional[str] = None
    recovery: Optional[str] = None
    duration: Optional[str] = None
    focus: Optional[str] = None
    benefits: Optional[str] = None
    hill_requirement: Optional[dict[str, str]] = field(default=None, compare=False)

    def phase(self, name: str) -> Optional[str]:
        for phase_name, text in self.phases:
            if phase_name == name:
                return text
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "category": self.category,
            "description": self.description,
            "structure": self.structure,
            "phases": [{"phase": p, "text": t} for p, t in self.phases],
            "repetitions": self.repetitions,
            "rep_distance": self.rep_distance,
            "pace": self.pace,
            "recovery": self.recovery,
            "duration": self.duration,
            "focus": self.focus,
            "benefits": self.benefits,
            "hill_requirement": dict(self.hill_requirement) if self.hill_requirement else None,
        }


def _phases_from_structure(structure: str) -> tuple[tuple[str, str], ...]:
    parts = [p.strip() for p in structure.split(" + ") if p.strip()]
    if len(parts) >= 3:
        return (("warmup", parts[0]), ("main", " + ".join(parts[1:-1])), ("cooldown", parts[-1]))
    if len(parts) == 2:
        return (("main", parts[0]), ("cooldown", parts[1]))
    return (("main", structure.strip()),) if structure.strip() else ()


def normalize_template(raw: dict[str, Any], kind: WorkoutKind, category: str) -> WorkoutTemplate:
    """Canonicalize one raw library entry."""
    nested = raw.get("workout")
    if isinstance(nested, dict):
        phases = tuple((p, str(nested[p]).strip()) for p in PHASE_ORDER if nested.get(p))
        main_parts = [text for p, text in phases if p != "recovery"]
        structure = " + ".join(main_parts)
        if nested.get("recovery"):
            structure += f" (recovery: {nested['recovery']})"
        recovery = nested.get("recovery")
    else:
        repetitions = raw.get("repetitions")
        structure = str(raw.get("structure") or "").strip()
        if not structure and repetitions:
            structure = f"Warmup + {repetitions} + Cooldown"
        phases = _phases_from_structure(structure)
        if repetitions:
            phases = tuple((p, repetitions if p == "main" else text) for p, text in phases)
        recovery = raw.get("recovery")

    return WorkoutTemplate(
        name=str(raw.get("name") or "Workout"),
        kind=kind,
        category=category,
        description=str(raw.get("description") or ""),
        structure=structure,
        phases=phases,
        repetitions=raw.get("repetitions"),
        rep_distance=raw.get("distance"),
        pace=raw.get("pace"),
        recovery=recovery,
        duration=raw.get("duration"),
        focus=raw.get("focus"),
        benefits=raw.get("benefits"),
        hill_requirement=dict(raw["hill_requirement"]) if raw.get("hill_requirement") else None,
    )


class WorkoutCatalog:
    """Positional template lookup by (kind, category)."""

    def __init__(self, library: Optional[dict[str, dict[str, list[dict[str, Any]]]]] = None):
        self._library = WORKOUT_LIBRARY if library is None else library
        self._cache: dict[tuple[WorkoutKind, str], tuple[WorkoutTemplate, ...]] = {}

    def _kind(self, kind: Any) -> WorkoutKind:
        parsed = parse_kind(kind)
        if parsed is None or parsed.value not in self._library:
            raise TemplateNotFoundError(f"Unknown workout kind: {kind!r}")
        return parsed

    def kinds(self) -> list[str]:
        return list(self._library)

    def categories(self, kind: Any) -> list[str]:
        return list(self._library[self._kind(kind).value])

    def get_templates_by_category(self, kind: Any, category: str) -> tuple[WorkoutTemplate, ...]:
        """Ordered templates for (kind, category); empty when the category is unknown.

        Category matching is exact first, then case-insensitive.
        """
        workout_kind = self._kind(kind)
        key = (workout_kind, category)
        if key in self._cache:
            return self._cache[key]

        categories = self._library[workout_kind.value]
        name = category if category in categories else None
        if name is None:
            name = next((c for c in categories if c.lower() == str(category).lower()), None)
        raw_list = categories.get(name, []) if name else []
        templates = tuple(normalize_template(raw, workout_kind, name) for raw in raw_list)
        if not templates:
            logger.debug("no templates for category", extra={"ctx_kind": workout_kind.value, "ctx_category": category})
        self._cache[key] = templates
        return templates

    def get_template(self, reference: WorkoutReference) -> WorkoutTemplate:
        templates = self.get_templates_by_category(reference.kind, reference.category)
        if not 0 <= reference.index < len(templates):
            raise TemplateNotFoundError(
                f"No template at index {reference.index} for {reference.kind.value}/{reference.category} "
                f"({len(templates)} available)"
            )
        return templates[reference.index]


@lru_cache(maxsize=1)
def default_catalog() -> WorkoutCatalog:
    return WorkoutCatalog()
