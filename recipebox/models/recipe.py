"""Recipe Pydantic models."""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Difficulty = Literal["easy", "medium", "hard", "any"]


class Ingredient(BaseModel):
    """Single ingredient line."""

    name: str = Field(..., description="Ingredient name")
    amount: str = Field("", description="Quantity as written (e.g., '2', '1/2')")
    unit: str = Field("", description="Unit of measurement (e.g., 'cups', 'g')")


class GenerationRequest(BaseModel):
    """Request body for recipe generation from available ingredients."""

    ingredients: str = Field(..., description="Free-text list of available ingredients")
    cuisine: Optional[str] = Field(None, description="Cuisine style (e.g., 'Italian')")
    dietary: Optional[str] = Field(None, description="Dietary requirements (e.g., 'vegan')")
    servings: Optional[int] = Field(None, ge=1, le=20, description="Number of servings")
    difficulty: Optional[Difficulty] = Field(None, description="Desired difficulty level")

    @field_validator("cuisine", "dietary", "difficulty", "servings", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # Form inputs send "" for untouched fields
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RecipeDraft(BaseModel):
    """Recipe produced by generation, not yet saved by the user.

    Values the model got wrong (an unknown difficulty, a time given as text)
    are kept as-is so the user can see and edit them.
    """

    title: str = Field(..., min_length=1, description="Recipe title")
    description: Optional[str] = Field(None, description="Brief appetizing description")
    cuisine_type: Optional[str] = Field(None, description="Cuisine type")
    prep_time: Optional[Union[int, float, str]] = Field(None, description="Preparation time in minutes")
    cook_time: Optional[Union[int, float, str]] = Field(None, description="Cooking time in minutes")
    servings: Optional[Union[int, float, str]] = Field(None, description="Number of servings")
    difficulty: Optional[str] = Field(None, description="easy, medium or hard")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ordered ingredient lines")
    instructions: str = Field(..., description="Newline-delimited steps")
    tags: List[str] = Field(default_factory=list, description="Unique tags")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Garlic Butter Chicken with Rice",
                "description": "Juicy pan-seared chicken in a garlicky butter sauce.",
                "cuisine_type": "American",
                "prep_time": 10,
                "cook_time": 25,
                "servings": 4,
                "difficulty": "easy",
                "ingredients": [
                    {"name": "chicken thighs", "amount": "4", "unit": "pieces"},
                    {"name": "rice", "amount": "1.5", "unit": "cups"},
                    {"name": "garlic", "amount": "4", "unit": "cloves"},
                ],
                "instructions": "Step 1: Rinse the rice.\nStep 2: Sear the chicken.\nStep 3: Make the sauce.",
                "tags": ["weeknight", "one-pan"],
            }
        }
    )


class RecipeResponse(BaseModel):
    """Response wrapper for /ai/generate-recipe."""

    recipe: RecipeDraft
