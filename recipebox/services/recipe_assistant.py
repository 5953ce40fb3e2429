"""Recipe generation, meal planning, nutrition and substitution service."""

from __future__ import annotations

import logging
from typing import TypeVar

from recipebox.models import (
    GenerationRequest,
    MealPlanDraft,
    MealPlanRequest,
    NutritionEstimate,
    NutritionRequest,
    RecipeDraft,
    SubstitutionRequest,
)
from recipebox.services import prompt_builder
from recipebox.services.response_extractor import (
    Extraction,
    extract_meal_plan,
    extract_nutrition,
    extract_recipe,
)
from recipebox.services.text_generation import TextGenerator
from recipebox.utils.exceptions import GenerationError
from recipebox.utils.validators import validate_ingredient_text, validate_ingredients_list

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Output token budgets per task
RECIPE_MAX_TOKENS = 1500
MEAL_PLAN_MAX_TOKENS = 1000
NUTRITION_MAX_TOKENS = 300
SUBSTITUTION_MAX_TOKENS = 200

# How much of a bad model response ends up in the logs
LOGGED_OUTPUT_CHARS = 500


class RecipeAssistant:
    """Runs prompt -> provider -> extraction for each assistant task.

    Holds no state besides the injected provider, so one instance can serve
    concurrent requests.
    """

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    async def generate_recipe(self, request: GenerationRequest) -> RecipeDraft:
        validate_ingredient_text(request.ingredients)
        prompt = prompt_builder.build_recipe_prompt(request)

        logger.info("Generating recipe", extra={"provider": self.generator.provider})
        text = await self.generator.generate(prompt, max_tokens=RECIPE_MAX_TOKENS)
        return self._unwrap("recipe", text, extract_recipe(text))

    async def plan_meals(self, request: MealPlanRequest) -> MealPlanDraft:
        prompt = prompt_builder.build_meal_plan_prompt(request)

        logger.info(
            "Generating %d-day meal plan from %d recipes",
            request.days,
            len(request.recipes),
            extra={"provider": self.generator.provider},
        )
        text = await self.generator.generate(prompt, max_tokens=MEAL_PLAN_MAX_TOKENS)
        return self._unwrap("meal_plan", text, extract_meal_plan(text, request.days))

    async def estimate_nutrition(self, request: NutritionRequest) -> NutritionEstimate:
        validate_ingredients_list(request.ingredients)
        prompt = prompt_builder.build_nutrition_prompt(request)

        text = await self.generator.generate(prompt, max_tokens=NUTRITION_MAX_TOKENS, fast=True)
        return self._unwrap("nutrition", text, extract_nutrition(text))

    async def suggest_substitution(self, request: SubstitutionRequest) -> str:
        """Conversational answer, returned exactly as the provider produced it."""
        prompt = prompt_builder.build_substitution_prompt(request)
        return await self.generator.generate(prompt, max_tokens=SUBSTITUTION_MAX_TOKENS, fast=True)

    def _unwrap(self, task: str, text: str, extraction: Extraction[T]) -> T:
        if extraction.ok:
            return extraction.value

        error = extraction.error
        logger.warning(
            "Could not extract %s from model output: %s",
            task,
            error,
            extra={
                "task": task,
                "kind": error.kind.value,
                "key": error.key,
                "provider": self.generator.provider,
                "output_excerpt": text[:LOGGED_OUTPUT_CHARS],
                "output_length": len(text),
            },
        )
        raise GenerationError(f"Failed to extract {task}: {error}", kind=error.kind.value)
