"""Nutrition and substitution Pydantic models."""

from typing import List, Union

from pydantic import BaseModel, Field

from recipebox.models.recipe import Ingredient


class NutritionRequest(BaseModel):
    """Request body for /ai/nutrition."""

    ingredients: List[Ingredient] = Field(..., description="Ingredient lines; blank names are skipped")
    servings: int = Field(1, ge=1, description="Servings the recipe makes")


class NutritionEstimate(BaseModel):
    """Approximate nutrition per serving. Not verified."""

    calories: Union[int, float, str] = Field(..., description="Calories per serving")
    protein: str = Field(..., description="e.g. '25g'")
    carbs: str = Field(..., description="e.g. '30g'")
    fat: str = Field(..., description="e.g. '10g'")
    fiber: str = Field(..., description="e.g. '5g'")


class NutritionResponse(BaseModel):
    nutrition: NutritionEstimate


class SubstitutionRequest(BaseModel):
    """Request body for /ai/substitutions."""

    ingredient: str = Field(..., min_length=1, description="Ingredient to replace")
    recipe: str = Field("", description="Title of the recipe it belongs to")


class SubstitutionResponse(BaseModel):
    substitution: str
