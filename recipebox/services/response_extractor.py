"""Turn free-form model text into validated drafts.

Extraction is one-shot and never raises: callers always get an `Extraction`
holding either a value or an `ExtractionError`. The pipeline is

1. slice the text from the first "{" to the last "}" (models like to wrap
   JSON in prose or code fences),
2. parse the slice with `json.loads`,
3. check it against a `TargetShape` (required keys present, list/object
   keys of the right kind, unknown keys dropped),
4. normalize loosely typed values and build the pydantic model.

Values are not checked against business rules. A difficulty of "tricky" or a
prep time of "about 10 minutes" is kept and shown to the user.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import ValidationError

from recipebox.models import (
    WEEK_DAYS,
    MealPlanDraft,
    NutritionEstimate,
    RecipeDraft,
)

T = TypeVar("T")

MEAL_SLOTS = ("breakfast", "lunch", "dinner")
ALLOWED_PLAN_DAYS = (3, 5, 7)

_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")


class ExtractionErrorKind(str, Enum):
    NO_JSON_FOUND = "no_json_found"
    MALFORMED_JSON = "malformed_json"
    SCHEMA_MISMATCH = "schema_mismatch"


@dataclass(frozen=True)
class ExtractionError:
    """Why a block of model text could not be used."""

    kind: ExtractionErrorKind
    detail: str
    key: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.detail}"


@dataclass(frozen=True)
class Extraction(Generic[T]):
    """Tagged result: exactly one of `value` / `error` is set."""

    value: Optional[T] = None
    error: Optional[ExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Extraction[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls, kind: ExtractionErrorKind, detail: str, key: Optional[str] = None
    ) -> "Extraction[T]":
        return cls(error=ExtractionError(kind=kind, detail=detail, key=key))


@dataclass(frozen=True)
class TargetShape:
    """Keys we expect in the model's JSON object.

    `required` keys must be present and not null. `list_keys` and
    `object_keys` must hold a JSON array / object when present. String values
    of `numeric_keys` that look like numbers are converted to int or float.
    """

    name: str
    required: Tuple[str, ...]
    optional: Tuple[str, ...] = ()
    list_keys: Tuple[str, ...] = ()
    object_keys: Tuple[str, ...] = ()
    numeric_keys: Tuple[str, ...] = ()

    @property
    def keys(self) -> Tuple[str, ...]:
        return self.required + self.optional


RECIPE_SHAPE = TargetShape(
    name="recipe",
    required=("title", "instructions"),
    optional=(
        "description",
        "cuisine_type",
        "prep_time",
        "cook_time",
        "servings",
        "difficulty",
        "ingredients",
        "tags",
    ),
    list_keys=("ingredients",),
    numeric_keys=("prep_time", "cook_time", "servings"),
)

NUTRITION_SHAPE = TargetShape(
    name="nutrition",
    required=("calories", "protein", "carbs", "fat", "fiber"),
    numeric_keys=("calories",),
)


def meal_plan_shape(days: int) -> TargetShape:
    """Shape of a plan covering the first `days` days of the week."""
    if days not in ALLOWED_PLAN_DAYS:
        raise ValueError(f"days must be one of {ALLOWED_PLAN_DAYS}, got {days!r}")
    day_names = tuple(WEEK_DAYS[:days])
    return TargetShape(name=f"meal_plan_{days}", required=day_names, object_keys=day_names)


# ---------------------------------------------------------------------
# Generic pipeline
# ---------------------------------------------------------------------


def find_json_region(text: str) -> Optional[str]:
    """Widest "{...}" slice of the text, or None when there is no "{".

    A "{" with no later "}" returns the tail from the "{" so the parser can
    report what is wrong with it.
    """
    start = text.find("{")
    if start == -1:
        return None
    end = text.rfind("}")
    if end < start:
        return text[start:]
    return text[start : end + 1]


def coerce_number(value: Any) -> Any:
    """Numeric-looking strings become numbers ("15" -> 15, "2.5" -> 2.5)."""
    if isinstance(value, str):
        s = value.strip()
        if _NUMBER.match(s):
            return float(s) if "." in s else int(s)
    return value


def extract(text: str, shape: TargetShape) -> Extraction[Dict[str, Any]]:
    """Locate, parse and shape-check the JSON object in `text`."""
    region = find_json_region(text or "")
    if region is None:
        return Extraction.failure(ExtractionErrorKind.NO_JSON_FOUND, "no '{' found in model output")

    try:
        data = json.loads(region)
    except json.JSONDecodeError as e:
        return Extraction.failure(
            ExtractionErrorKind.MALFORMED_JSON,
            f"{e.msg} at line {e.lineno} column {e.colno}",
        )
    except RecursionError:
        return Extraction.failure(ExtractionErrorKind.MALFORMED_JSON, "nesting too deep")

    if not isinstance(data, dict):
        return Extraction.failure(
            ExtractionErrorKind.SCHEMA_MISMATCH,
            f"expected a JSON object for {shape.name}, got {type(data).__name__}",
        )

    for key in shape.required:
        if data.get(key) is None:
            return Extraction.failure(
                ExtractionErrorKind.SCHEMA_MISMATCH,
                f"missing required key '{key}' for {shape.name}",
                key=key,
            )

    shaped: Dict[str, Any] = {}
    for key in shape.keys:
        if key not in data:
            continue
        value = data[key]
        if key in shape.list_keys and value is not None and not isinstance(value, list):
            return Extraction.failure(
                ExtractionErrorKind.SCHEMA_MISMATCH,
                f"'{key}' must be a list, got {type(value).__name__}",
                key=key,
            )
        if key in shape.object_keys and not isinstance(value, dict):
            return Extraction.failure(
                ExtractionErrorKind.SCHEMA_MISMATCH,
                f"'{key}' must be an object, got {type(value).__name__}",
                key=key,
            )
        if key in shape.numeric_keys:
            value = coerce_number(value)
        shaped[key] = value

    return Extraction.success(shaped)


# ---------------------------------------------------------------------
# Normalization helpers
# ---------------------------------------------------------------------


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _as_scalar(value: Any) -> Any:
    """Numbers and strings pass as-is; objects, lists and booleans become JSON text."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return json.dumps(value, ensure_ascii=False)


def _normalize_ingredients(items: Optional[List[Any]]) -> List[Dict[str, str]]:
    normalized: List[Dict[str, str]] = []
    for item in items or []:
        if isinstance(item, dict):
            name = (_as_text(item.get("name")) or "").strip()
            amount = (_as_text(item.get("amount")) or "").strip()
            unit = (_as_text(item.get("unit")) or "").strip()
        else:
            # Bare strings ("2 cups rice") are kept whole as the name
            name = (_as_text(item) or "").strip()
            amount = unit = ""
        if not name:
            continue
        normalized.append({"name": name, "amount": amount, "unit": unit})
    return normalized


def _normalize_instructions(value: Any) -> str:
    if isinstance(value, list):
        steps = [(_as_text(step) or "").strip() for step in value]
        return "\n".join(step for step in steps if step)
    return _as_text(value) or ""


def _normalize_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    tags: List[str] = []
    for tag in value:
        text = (_as_text(tag) or "").strip()
        if text and text not in tags:
            tags.append(text)
    return tags


def _validation_failure(shape: TargetShape, e: ValidationError) -> Extraction[Any]:
    first = e.errors()[0] if e.errors() else {}
    loc = first.get("loc") or ()
    key = str(loc[0]) if loc else None
    return Extraction.failure(
        ExtractionErrorKind.SCHEMA_MISMATCH,
        f"{shape.name} rejected: {first.get('msg', str(e))}" + (f" ('{key}')" if key else ""),
        key=key,
    )


# ---------------------------------------------------------------------
# Typed extractors
# ---------------------------------------------------------------------


def extract_recipe(text: str) -> Extraction[RecipeDraft]:
    """Extract a `RecipeDraft` (requires title and instructions)."""
    result = extract(text, RECIPE_SHAPE)
    if not result.ok:
        return Extraction(error=result.error)

    data = dict(result.value)
    for key in ("title", "description", "cuisine_type", "difficulty"):
        if key in data:
            data[key] = _as_text(data[key])
    data["title"] = data["title"].strip()
    for key in RECIPE_SHAPE.numeric_keys:
        if key in data:
            data[key] = _as_scalar(data[key])
    data["instructions"] = _normalize_instructions(data["instructions"])
    data["ingredients"] = _normalize_ingredients(data.get("ingredients"))
    data["tags"] = _normalize_tags(data.get("tags"))

    try:
        return Extraction.success(RecipeDraft.model_validate(data))
    except ValidationError as e:
        return _validation_failure(RECIPE_SHAPE, e)


def extract_meal_plan(text: str, days: int) -> Extraction[MealPlanDraft]:
    """Extract a plan with exactly the first `days` week days, in order."""
    if days not in ALLOWED_PLAN_DAYS:
        return Extraction.failure(
            ExtractionErrorKind.SCHEMA_MISMATCH,
            f"days must be one of {ALLOWED_PLAN_DAYS}, got {days!r}",
        )
    shape = meal_plan_shape(days)
    result = extract(text, shape)
    if not result.ok:
        return Extraction(error=result.error)

    plan: Dict[str, Dict[str, Any]] = {}
    for day in shape.required:
        meals = result.value[day]
        slots: Dict[str, Any] = {slot: _as_text(meals.get(slot)) or "" for slot in MEAL_SLOTS}
        if meals.get("snack") is not None:
            slots["snack"] = _as_text(meals["snack"])
        plan[day] = slots

    try:
        return Extraction.success(MealPlanDraft.model_validate(plan))
    except ValidationError as e:
        return _validation_failure(shape, e)


def extract_nutrition(text: str) -> Extraction[NutritionEstimate]:
    """Extract the five-key nutrition estimate."""
    result = extract(text, NUTRITION_SHAPE)
    if not result.ok:
        return Extraction(error=result.error)

    data = dict(result.value)
    data["calories"] = _as_scalar(data["calories"])
    for key in ("protein", "carbs", "fat", "fiber"):
        data[key] = _as_text(data[key])

    try:
        return Extraction.success(NutritionEstimate.model_validate(data))
    except ValidationError as e:
        return _validation_failure(NUTRITION_SHAPE, e)
