"""
AI Plan Normalizer.

The backend's AI endpoints return loosely structured payloads: health
recommendations grouped by category, a 7-day meal plan keyed by day,
or a 7-day workout plan keyed by day. When the model's answer could not
be parsed, only a ``rawResponse`` text is present.

``normalize_plan`` turns any such payload into one of two variants:

- ``StructuredPlan``: a lazy, restartable sequence of day/category entries
- ``RawTextPlan``: a single block of text (the raw answer or a placeholder)

Normalization never raises. Malformed sub-entries are dropped one at a
time; the rest of the payload still renders.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Tuple, Union


class PlanKind(str, Enum):
    """The three kinds of AI-generated plan."""

    RECOMMENDATIONS = "recommendations"
    MEAL_PLAN = "meal_plan"
    WORKOUT_PLAN = "workout_plan"

    @property
    def structured_key(self) -> str:
        return _STRUCTURED_KEYS[self]

    @property
    def placeholder(self) -> str:
        return _PLACEHOLDERS[self]


_STRUCTURED_KEYS = {
    PlanKind.RECOMMENDATIONS: "recommendations",
    PlanKind.MEAL_PLAN: "mealPlan",
    PlanKind.WORKOUT_PLAN: "workoutPlan",
}

_PLACEHOLDERS = {
    PlanKind.RECOMMENDATIONS: "No recommendations available.",
    PlanKind.MEAL_PLAN: "No meal plan available.",
    PlanKind.WORKOUT_PLAN: "No workout plan available.",
}

RAW_TEXT_KEY = "rawResponse"


# ============================================================================
# Normalized entries
# ============================================================================


@dataclass(frozen=True)
class RecommendationCategory:
    key: str
    title: str
    items: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"key": self.key, "title": self.title, "items": list(self.items)}


@dataclass(frozen=True)
class MealItem:
    name: Optional[str]
    calories: Optional[Any]

    def to_dict(self) -> dict:
        return {"name": self.name, "calories": self.calories}


@dataclass(frozen=True)
class MealSlot:
    """All items for one meal type (breakfast, lunch, ...) on one day."""

    meal_type: str
    items: Tuple[MealItem, ...]

    def to_dict(self) -> dict:
        return {"meal_type": self.meal_type, "items": [i.to_dict() for i in self.items]}


@dataclass(frozen=True)
class MealDay:
    key: str
    label: str
    meals: Tuple[MealSlot, ...]
    total_calories: Optional[Any] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "meals": [m.to_dict() for m in self.meals],
            "total_calories": self.total_calories,
        }


@dataclass(frozen=True)
class Exercise:
    name: Optional[str]
    sets: Optional[Any] = None
    reps: Optional[Any] = None
    rest: Optional[Any] = None

    @property
    def detail(self) -> str:
        """Sets, reps and rest on one line, skipping whatever is missing."""
        volume = []
        if self.sets:
            volume.append(f"{self.sets} sets")
        if self.reps:
            volume.append(f"{self.reps} reps")
        parts = []
        if volume:
            parts.append(" × ".join(volume))
        if self.rest:
            parts.append(f"Rest: {self.rest}")
        return " | ".join(parts)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rest": self.rest,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class WorkoutDay:
    key: str
    label: str
    workout_type: Optional[str]
    exercises: Tuple[Exercise, ...]
    duration: Optional[Any] = None
    estimated_calories: Optional[Any] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "workout_type": self.workout_type,
            "duration": self.duration,
            "exercises": [e.to_dict() for e in self.exercises],
            "estimated_calories": self.estimated_calories,
        }


PlanEntry = Union[RecommendationCategory, MealDay, WorkoutDay]


# ============================================================================
# Plan variants
# ============================================================================


class StructuredPlan:
    """
    Structured plan whose entries are derived on each iteration.

    Holds a reference to the source mapping and re-normalizes it every
    time it is iterated, so it can be consumed any number of times.
    """

    is_structured = True

    def __init__(self, kind: PlanKind, source: Mapping):
        self.kind = kind
        self._source = source

    def __iter__(self) -> Iterator[PlanEntry]:
        return _ENTRY_BUILDERS[self.kind](self._source)

    def entries(self) -> Tuple[PlanEntry, ...]:
        return tuple(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, StructuredPlan):
            return NotImplemented
        return self.kind == other.kind and self.entries() == other.entries()

    def __repr__(self) -> str:
        return f"StructuredPlan(kind={self.kind.value!r}, entries={len(self.entries())})"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "structured": True,
            "entries": [e.to_dict() for e in self],
            "text": None,
        }


@dataclass(frozen=True)
class RawTextPlan:
    """Unstructured plan: the model's raw answer or a placeholder."""

    kind: PlanKind
    text: str
    is_placeholder: bool = False

    is_structured = False

    def __iter__(self) -> Iterator[PlanEntry]:
        return iter(())

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "structured": False,
            "entries": [],
            "text": self.text,
        }


NormalizedPlan = Union[StructuredPlan, RawTextPlan]


def normalize_plan(kind: Union[PlanKind, str], payload: Any) -> NormalizedPlan:
    """
    Normalize an AI payload (the backend's ``data`` object) of the given kind.

    A non-empty mapping under the kind's structured key yields a
    StructuredPlan. Otherwise the ``rawResponse`` text is used, and when
    that is missing too, the kind's placeholder text.
    """
    kind = PlanKind(kind)

    if isinstance(payload, str):
        return _raw_text(kind, payload)
    if not isinstance(payload, Mapping):
        return _raw_text(kind, None)

    structured = payload.get(kind.structured_key)
    if isinstance(structured, Mapping) and structured:
        return StructuredPlan(kind, structured)

    return _raw_text(kind, payload.get(RAW_TEXT_KEY))


def _raw_text(kind: PlanKind, text: Any) -> RawTextPlan:
    if isinstance(text, str) and text.strip():
        return RawTextPlan(kind=kind, text=text)
    return RawTextPlan(kind=kind, text=kind.placeholder, is_placeholder=True)


# ============================================================================
# Entry builders
# ============================================================================


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _present(value: Any) -> Optional[Any]:
    """None, empty strings and False count as absent."""
    if value is None or value == "" or value is False:
        return None
    return value


def _recommendation_entries(source: Mapping) -> Iterator[RecommendationCategory]:
    for key, items in source.items():
        if not _is_sequence(items):
            continue
        advice = tuple(
            str(item)
            for item in items
            if isinstance(item, (str, int, float)) and not isinstance(item, bool)
        )
        yield RecommendationCategory(key=str(key), title=str(key).replace("_", " "), items=advice)


def _meal_item(item: Any) -> Optional[MealItem]:
    if not isinstance(item, Mapping):
        return None
    return MealItem(name=item.get("name"), calories=item.get("calories"))


def as_meal_items(meal: Any) -> Tuple[MealItem, ...]:
    """A single meal mapping or a list of them, always as a tuple of items."""
    raw_items = meal if _is_sequence(meal) else [meal]
    items = (_meal_item(item) for item in raw_items)
    return tuple(item for item in items if item is not None)


def _meal_entries(source: Mapping) -> Iterator[MealDay]:
    for day, day_data in source.items():
        if not isinstance(day_data, Mapping):
            continue
        meals = day_data.get("meals")
        slots = ()
        if isinstance(meals, Mapping):
            slots = tuple(
                MealSlot(meal_type=str(meal_type), items=as_meal_items(meal))
                for meal_type, meal in meals.items()
            )
        yield MealDay(
            key=str(day),
            label=str(day_data.get("date") or day),
            meals=slots,
            total_calories=_present(day_data.get("totalCalories")),
        )


def _exercise(item: Any) -> Optional[Exercise]:
    if not isinstance(item, Mapping):
        return None
    return Exercise(
        name=item.get("name"),
        sets=_present(item.get("sets")),
        reps=_present(item.get("reps")),
        rest=_present(item.get("rest")),
    )


def _workout_entries(source: Mapping) -> Iterator[WorkoutDay]:
    for day, day_data in source.items():
        if not isinstance(day_data, Mapping):
            continue
        workout_type = _present(day_data.get("type"))
        label = str(day_data.get("date") or day)
        if workout_type:
            label = f"{label} - {workout_type}"

        exercises = ()
        main_workout = day_data.get("mainWorkout")
        if _is_sequence(main_workout):
            parsed = (_exercise(item) for item in main_workout)
            exercises = tuple(e for e in parsed if e is not None)

        yield WorkoutDay(
            key=str(day),
            label=label,
            workout_type=workout_type,
            exercises=exercises,
            duration=_present(day_data.get("duration")),
            estimated_calories=_present(day_data.get("estimatedCalories")),
        )


_ENTRY_BUILDERS = {
    PlanKind.RECOMMENDATIONS: _recommendation_entries,
    PlanKind.MEAL_PLAN: _meal_entries,
    PlanKind.WORKOUT_PLAN: _workout_entries,
}


# ============================================================================
# Text rendering
# ============================================================================


_RAW_TITLES = {
    PlanKind.RECOMMENDATIONS: "AI Recommendations",
    PlanKind.MEAL_PLAN: "Your Meal Plan",
    PlanKind.WORKOUT_PLAN: "Your Workout Plan",
}


def render_lines(plan: NormalizedPlan) -> Iterator[str]:
    """Yield display lines for either plan variant."""
    if not plan.is_structured:
        yield _RAW_TITLES[plan.kind]
        yield from plan.text.splitlines()
        return

    for entry in plan:
        if isinstance(entry, RecommendationCategory):
            yield entry.title.capitalize()
            for item in entry.items:
                yield f"  • {item}"
        elif isinstance(entry, MealDay):
            yield entry.label
            for slot in entry.meals:
                yield f"  {slot.meal_type.capitalize()}"
                for item in slot.items:
                    yield f"    • {_blank(item.name)} ({_blank(item.calories)} cal)"
            if entry.total_calories:
                yield f"  Total: {entry.total_calories} calories"
        elif isinstance(entry, WorkoutDay):
            yield entry.label
            if entry.duration:
                yield f"  Duration: {entry.duration} minutes"
            for exercise in entry.exercises:
                yield f"  {_blank(exercise.name)}"
                if exercise.detail:
                    yield f"    {exercise.detail}"
            if entry.estimated_calories:
                yield f"  Estimated calories burned: {entry.estimated_calories}"


def _blank(value: Any) -> str:
    return "" if value is None else str(value)
