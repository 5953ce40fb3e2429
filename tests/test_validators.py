"""Tests for input validators."""

import pytest

from recipebox.models import Ingredient
from recipebox.utils.exceptions import ValidationError
from recipebox.utils.validators import (
    validate_ingredient_text,
    validate_ingredients_list,
    validate_share_email,
)


def test_validate_ingredient_text_valid():
    """Text is returned unchanged, surrounding whitespace included."""
    assert validate_ingredient_text(" chicken, rice ") == " chicken, rice "


def test_validate_ingredient_text_blank():
    with pytest.raises(ValidationError):
        validate_ingredient_text("   \n")


def test_validate_ingredient_text_too_long():
    assert validate_ingredient_text("x" * 2000)
    with pytest.raises(ValidationError):
        validate_ingredient_text("x" * 2001)


def test_validate_ingredients_list_valid():
    """Lines without a name are dropped."""
    ingredients = [Ingredient(name="chicken"), Ingredient(name=" "), Ingredient(name="rice", amount="1", unit="cup")]
    result = validate_ingredients_list(ingredients)
    assert [i.name for i in result] == ["chicken", "rice"]


def test_validate_ingredients_list_empty():
    with pytest.raises(ValidationError):
        validate_ingredients_list([])


def test_validate_ingredients_list_too_long():
    with pytest.raises(ValidationError):
        validate_ingredients_list([Ingredient(name=f"item {i}") for i in range(101)])


@pytest.mark.parametrize("email", ("friend@example.com", "  a.b+c@mail.co.uk  "))
def test_validate_share_email_valid(email):
    assert validate_share_email(email) == email.strip()


@pytest.mark.parametrize("email", ("", "friend", "friend@", "@example.com", "a b@example.com"))
def test_validate_share_email_invalid(email):
    with pytest.raises(ValidationError):
        validate_share_email(email)
