"""Bearer token authentication against Supabase auth."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recipebox.api.dependencies import get_sharing_service
from recipebox.services.recipe_sharing import RecipeSharingService
from recipebox.utils.exceptions import AuthenticationError

security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    sharing: RecipeSharingService = Depends(get_sharing_service),
) -> str:
    """
    Resolve the caller's Supabase user id from the Authorization header.

    Returns:
        The authenticated user's id

    Raises:
        HTTPException: If the token is missing or rejected by Supabase
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing access token. Provide an Authorization Bearer token.",
        )

    try:
        return await sharing.resolve_user_id(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token.",
        ) from e
