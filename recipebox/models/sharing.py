"""Recipe sharing Pydantic models."""

from pydantic import BaseModel, ConfigDict, Field


class ShareRequest(BaseModel):
    """Request body for /recipes/share. Accepts camelCase keys from the web client."""

    recipe_id: str = Field(..., alias="recipeId", min_length=1)
    share_email: str = Field(..., alias="shareEmail", min_length=3)

    model_config = ConfigDict(populate_by_name=True)


class ShareResponse(BaseModel):
    message: str
