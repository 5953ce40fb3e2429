"""Shared API dependencies.

Provider and Supabase clients are created once in `create_app` and kept on
`app.state`; these dependencies hand them to the routes.
"""

from fastapi import Depends, HTTPException, Request, status

from recipebox.services.recipe_assistant import RecipeAssistant
from recipebox.services.recipe_sharing import RecipeSharingService
from recipebox.services.text_generation import TextGenerator


def get_text_generator(request: Request) -> TextGenerator:
    """Get the application's text-generation provider."""
    return request.app.state.text_generator


def get_recipe_assistant(generator: TextGenerator = Depends(get_text_generator)) -> RecipeAssistant:
    """Get recipe assistant service instance."""
    return RecipeAssistant(generator)


def get_sharing_service(request: Request) -> RecipeSharingService:
    """Get recipe sharing service instance, or 503 when Supabase is not configured."""
    client = request.app.state.supabase
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "Recipe sharing is not configured"},
        )
    return RecipeSharingService(client)
