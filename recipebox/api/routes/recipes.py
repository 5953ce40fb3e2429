"""Recipe sharing endpoint."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from recipebox.api.dependencies import get_sharing_service
from recipebox.middleware.auth import get_current_user_id
from recipebox.middleware.rate_limit import hourly_limit, limiter
from recipebox.models import ShareRequest, ShareResponse
from recipebox.services.recipe_sharing import RecipeSharingService
from recipebox.utils.exceptions import StoreError, ValidationError
from recipebox.utils.validators import validate_share_email

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/share", response_model=ShareResponse)
@limiter.limit(hourly_limit)
async def share_recipe(
    request: Request,
    body: ShareRequest,
    user_id: str = Depends(get_current_user_id),
    sharing: RecipeSharingService = Depends(get_sharing_service),
) -> ShareResponse:
    """
    Share one of the caller's recipes with another user by email.

    If the recipient has no profile yet, the recipe is made public instead.
    """
    logger.info(
        "Route /recipes/share called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/recipes/share",
            "params": {"recipe_id": body.recipe_id, "user_id": user_id},
        },
    )

    try:
        email = validate_share_email(body.share_email)
        message = await sharing.share(user_id=user_id, recipe_id=body.recipe_id, share_email=email)
        return ShareResponse(message=message)

    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid request", "detail": str(e)},
        ) from e
    except StoreError as e:
        logger.error(f"Share failed: {str(e)}", extra={"recipe_id": body.recipe_id})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "Failed to share recipe", "detail": str(e)},
        ) from e
    except Exception as e:
        logger.error(f"Unexpected error in share_recipe: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Internal server error", "detail": "An unexpected error occurred"},
        ) from e
