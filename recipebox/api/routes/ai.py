"""AI assistant endpoints: recipe generation, meal plans, nutrition, substitutions."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from recipebox.api.dependencies import get_recipe_assistant
from recipebox.middleware.rate_limit import hourly_limit, limiter
from recipebox.models import (
    GenerationRequest,
    MealPlanRequest,
    MealPlanResponse,
    NutritionRequest,
    NutritionResponse,
    RecipeResponse,
    SubstitutionRequest,
    SubstitutionResponse,
)
from recipebox.services.recipe_assistant import RecipeAssistant
from recipebox.utils.exceptions import GenerationError, ProviderError, ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/ai", tags=["ai"])

GENERATION_FAILED = "Generation failed, please try again"


def _log_route(request: Request, route: str, params: dict) -> None:
    logger.info(
        f"Route {route} called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": route,
            "params": params,
        },
    )


def _bad_request(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": "Invalid request", "detail": str(e)},
    )


def _generation_failed(request: Request) -> HTTPException:
    # The specific cause was already logged where it happened
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "error": GENERATION_FAILED,
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def _internal_error(route: str, e: Exception) -> HTTPException:
    logger.error(f"Unexpected error in {route}: {str(e)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "Internal server error", "detail": "An unexpected error occurred"},
    )


@router.post("/generate-recipe", response_model=RecipeResponse)
@limiter.limit(hourly_limit)
async def generate_recipe(
    request: Request,
    body: GenerationRequest,
    assistant: RecipeAssistant = Depends(get_recipe_assistant),
) -> RecipeResponse:
    """
    Generate a recipe from the ingredients the user has.

    - **ingredients**: Free-text ingredient list
    - **cuisine**, **dietary**, **servings**, **difficulty**: Optional constraints
    """
    _log_route(
        request,
        "/ai/generate-recipe",
        {
            "ingredients": body.ingredients[:200],
            "cuisine": body.cuisine,
            "dietary": body.dietary,
            "servings": body.servings,
            "difficulty": body.difficulty,
        },
    )

    try:
        recipe = await assistant.generate_recipe(body)
        return RecipeResponse(recipe=recipe)
    except ValidationError as e:
        raise _bad_request(e) from e
    except (ProviderError, GenerationError) as e:
        raise _generation_failed(request) from e
    except Exception as e:
        raise _internal_error("generate_recipe", e) from e


@router.post("/meal-plan", response_model=MealPlanResponse)
@limiter.limit(hourly_limit)
async def meal_plan(
    request: Request,
    body: MealPlanRequest,
    assistant: RecipeAssistant = Depends(get_recipe_assistant),
) -> MealPlanResponse:
    """
    Plan 3, 5 or 7 days of meals starting Monday, drawing on the given recipes.
    """
    _log_route(
        request,
        "/ai/meal-plan",
        {
            "days": body.days,
            "recipes_count": len(body.recipes),
            "preferences": (body.preferences or "")[:200],
        },
    )

    try:
        plan = await assistant.plan_meals(body)
        return MealPlanResponse(plan=plan)
    except ValidationError as e:
        raise _bad_request(e) from e
    except (ProviderError, GenerationError) as e:
        raise _generation_failed(request) from e
    except Exception as e:
        raise _internal_error("meal_plan", e) from e


@router.post("/nutrition", response_model=NutritionResponse)
@limiter.limit(hourly_limit)
async def nutrition(
    request: Request,
    body: NutritionRequest,
    assistant: RecipeAssistant = Depends(get_recipe_assistant),
) -> NutritionResponse:
    """
    Estimate nutrition per serving. The numbers are approximate.
    """
    _log_route(
        request,
        "/ai/nutrition",
        {"ingredients_count": len(body.ingredients), "servings": body.servings},
    )

    try:
        estimate = await assistant.estimate_nutrition(body)
        return NutritionResponse(nutrition=estimate)
    except ValidationError as e:
        raise _bad_request(e) from e
    except (ProviderError, GenerationError) as e:
        raise _generation_failed(request) from e
    except Exception as e:
        raise _internal_error("nutrition", e) from e


@router.post("/substitutions", response_model=SubstitutionResponse)
@limiter.limit(hourly_limit)
async def substitutions(
    request: Request,
    body: SubstitutionRequest,
    assistant: RecipeAssistant = Depends(get_recipe_assistant),
) -> SubstitutionResponse:
    """
    Suggest substitutes for one ingredient. The answer is plain text.
    """
    _log_route(
        request,
        "/ai/substitutions",
        {"ingredient": body.ingredient[:200], "recipe": body.recipe[:200]},
    )

    try:
        text = await assistant.suggest_substitution(body)
        return SubstitutionResponse(substitution=text)
    except ProviderError as e:
        raise _generation_failed(request) from e
    except Exception as e:
        raise _internal_error("substitutions", e) from e
