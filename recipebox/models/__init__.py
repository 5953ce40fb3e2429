"""Pydantic models."""

from recipebox.models.meal_plan import (
    WEEK_DAYS,
    MealPlanDraft,
    MealPlanRequest,
    MealPlanResponse,
    MealSlots,
    RecipeSummary,
)
from recipebox.models.nutrition import (
    NutritionEstimate,
    NutritionRequest,
    NutritionResponse,
    SubstitutionRequest,
    SubstitutionResponse,
)
from recipebox.models.recipe import (
    GenerationRequest,
    Ingredient,
    RecipeDraft,
    RecipeResponse,
)
from recipebox.models.sharing import ShareRequest, ShareResponse

__all__ = [
    "WEEK_DAYS",
    "GenerationRequest",
    "Ingredient",
    "MealPlanDraft",
    "MealPlanRequest",
    "MealPlanResponse",
    "MealSlots",
    "NutritionEstimate",
    "NutritionRequest",
    "NutritionResponse",
    "RecipeDraft",
    "RecipeResponse",
    "RecipeSummary",
    "ShareRequest",
    "ShareResponse",
    "SubstitutionRequest",
    "SubstitutionResponse",
]
