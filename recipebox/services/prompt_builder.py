"""Prompt rendering for the text-generation provider.

Every builder is a pure function of its request. Optional constraints are
only rendered when set: an absent cuisine produces no "Cuisine style:" line
at all. Structured tasks end with a literal example of the JSON we will try
to extract, so the key names here must match the shapes in
`response_extractor`.
"""

from __future__ import annotations

from typing import List, Optional

from recipebox.models import (
    WEEK_DAYS,
    GenerationRequest,
    MealPlanRequest,
    NutritionRequest,
    SubstitutionRequest,
)

JSON_ONLY_INSTRUCTION = "Return ONLY valid JSON, no markdown, no code blocks, no explanations."

RECIPE_JSON_TEMPLATE = """
{
  "title": "Recipe Name",
  "description": "Brief appetizing description",
  "cuisine_type": "Cuisine type",
  "prep_time": 15,
  "cook_time": 30,
  "servings": 4,
  "difficulty": "easy",
  "ingredients": [{"name": "ingredient", "amount": "2", "unit": "cups"}],
  "instructions": "Step 1: ...\\nStep 2: ...\\nStep 3: ...",
  "tags": ["tag1", "tag2"]
}
""".strip()

NUTRITION_JSON_TEMPLATE = """
{"calories": 450, "protein": "25g", "carbs": "30g", "fat": "10g", "fiber": "5g"}
""".strip()


def _clause(label: str, value: Optional[object]) -> Optional[str]:
    """Render "Label: value." or nothing when the value is unset or blank."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return f"{label}: {text}."


def _join(parts: List[Optional[str]]) -> str:
    return "\n".join(p for p in parts if p is not None)


def build_recipe_prompt(request: GenerationRequest) -> str:
    """Prompt for a single recipe built around the user's ingredients."""
    constraints = [
        _clause("Cuisine style", request.cuisine),
        _clause("Dietary requirements", request.dietary),
        _clause("Servings", request.servings),
        _clause("Difficulty level", request.difficulty),
    ]
    constraints_text = _join(constraints)

    sections = [f"Create a recipe using these available ingredients: {request.ingredients}."]
    if constraints_text:
        sections.append(constraints_text)
    sections.append(f"Return ONLY a valid JSON object with this exact structure:\n{RECIPE_JSON_TEMPLATE}")
    sections.append(
        "Make it delicious and practical. Only include ingredients from the provided list "
        "plus basic pantry staples (salt, pepper, oil, water).\n"
        f"{JSON_ONLY_INSTRUCTION}"
    )
    return "\n\n".join(sections)


def _meal_plan_template(days: List[str]) -> str:
    lines = ["{"]
    for i, day in enumerate(days):
        comma = "," if i < len(days) - 1 else ""
        if i == 0:
            value = '{"breakfast": "recipe or suggestion", "lunch": "recipe name from list", "dinner": "recipe name from list"}'
        else:
            value = '{"breakfast": "...", "lunch": "...", "dinner": "..."}'
        lines.append(f'  "{day}": {value}{comma}')
    lines.append("}")
    return "\n".join(lines)


def build_meal_plan_prompt(request: MealPlanRequest) -> str:
    """Prompt for a plan of `request.days` days starting Monday."""
    days = list(WEEK_DAYS[: request.days])
    recipe_list = "\n".join(
        f"- {r.title} ({r.cuisine_type or 'various'}, {r.difficulty or 'any'} difficulty)"
        for r in request.recipes
    )

    sections = [f"Create a {request.days}-day meal plan using these recipes:\n{recipe_list}".rstrip()]
    preferences = _clause("Preferences/restrictions", request.preferences)
    if preferences:
        sections.append(preferences)
    sections.append(
        "Return ONLY a valid JSON object with this structure:\n"
        f"{_meal_plan_template(days)}"
    )
    sections.append(
        "Use the recipe names from the list for lunch and dinner when possible. "
        "For breakfast suggest simple options.\n"
        f"Plan for {request.days} days starting Monday ({', '.join(days)}). "
        "Include variety and balance.\n"
        f"{JSON_ONLY_INSTRUCTION}"
    )
    return "\n\n".join(sections)


def build_nutrition_prompt(request: NutritionRequest) -> str:
    """Prompt for a per-serving nutrition estimate."""
    ingredient_list = ", ".join(
        " ".join(part for part in (i.amount.strip(), i.unit.strip(), i.name.strip()) if part)
        for i in request.ingredients
        if i.name.strip()
    )
    return (
        f"Estimate the nutritional info per serving for a recipe with {request.servings} servings "
        f"containing: {ingredient_list}.\n\n"
        "Return ONLY a valid JSON object with these exact keys: calories (number), "
        'protein (string like "25g"), carbs (string like "30g"), fat (string like "10g"), '
        'fiber (string like "5g"). Example:\n'
        f"{NUTRITION_JSON_TEMPLATE}\n"
        "No explanation, just the JSON."
    )


def build_substitution_prompt(request: SubstitutionRequest) -> str:
    """Conversational prompt; the answer is returned to the user verbatim."""
    subject = f'Suggest 2-3 substitutes for "{request.ingredient.strip()}"'
    if request.recipe.strip():
        subject += f' in a recipe called "{request.recipe.strip()}"'
    return (
        f"{subject}.\n"
        'Be concise. Format: "Use X (ratio), or Y (ratio). Note: brief tip."'
    )
