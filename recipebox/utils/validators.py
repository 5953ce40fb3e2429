"""Input validation utilities."""

import re
from typing import List

from recipebox.models import Ingredient
from recipebox.utils.exceptions import ValidationError

MAX_INGREDIENT_TEXT = 2000
MAX_INGREDIENT_LINES = 100

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_ingredient_text(text: str) -> str:
    """
    Validate the free-text ingredient list used for recipe generation.

    Args:
        text: Ingredients as typed by the user

    Returns:
        The text, unchanged

    Raises:
        ValidationError: If the text is blank or too long
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Ingredients must be a non-empty string")

    if len(text) > MAX_INGREDIENT_TEXT:
        raise ValidationError(f"Ingredients text cannot exceed {MAX_INGREDIENT_TEXT} characters")

    return text


def validate_ingredients_list(ingredients: List[Ingredient]) -> List[Ingredient]:
    """
    Validate structured ingredient lines for a nutrition estimate.

    Lines without a name are dropped.

    Raises:
        ValidationError: If no named ingredient remains or the list is too long
    """
    if len(ingredients) > MAX_INGREDIENT_LINES:
        raise ValidationError(f"Ingredients list cannot exceed {MAX_INGREDIENT_LINES} items")

    named = [i for i in ingredients if i.name.strip()]
    if not named:
        raise ValidationError("At least one named ingredient is required")

    return named


def validate_share_email(email: str) -> str:
    """Return the stripped address, or raise ValidationError if it is not one."""
    email = (email or "").strip()
    if not _EMAIL.match(email):
        raise ValidationError("shareEmail must be a valid email address")
    return email
