"""Meal plan Pydantic models."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, RootModel

# Plans always start on Monday and are sliced to the requested length
WEEK_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class RecipeSummary(BaseModel):
    """A saved recipe the planner may draw from."""

    title: str
    cuisine_type: Optional[str] = None
    difficulty: Optional[str] = None


class MealPlanRequest(BaseModel):
    """Request body for /ai/meal-plan."""

    recipes: List[RecipeSummary] = Field(default_factory=list, description="Known recipes to plan with")
    preferences: Optional[str] = Field(None, description="Preferences or restrictions")
    days: Literal[3, 5, 7] = Field(7, description="Number of days, starting Monday")


class MealSlots(BaseModel):
    """Suggestions for one day. Slots the model left out are empty strings."""

    breakfast: str = ""
    lunch: str = ""
    dinner: str = ""
    snack: Optional[str] = None


class MealPlanDraft(RootModel[Dict[str, MealSlots]]):
    """Day name -> meals, in calendar order."""

    def days(self) -> List[str]:
        return list(self.root)


class MealPlanResponse(BaseModel):
    plan: MealPlanDraft
