"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from fakes import NUTRITION_JSON
from recipebox.main import create_app
from recipebox.utils.exceptions import ProviderError

GENERATION_FAILED = "Generation failed, please try again"


def test_root(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "Recipe Box API"


def test_health_check(client: TestClient):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_readiness_check(client: TestClient):
    """Test readiness check endpoint."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["dependencies"] == {"text_generation": "fake", "sharing": False}


def test_responses_carry_request_id_and_security_headers(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_generate_recipe(client: TestClient, generator):
    response = client.post(
        "/ai/generate-recipe",
        json={"ingredients": "rice, tomato", "cuisine": "", "servings": 2, "difficulty": "easy"},
    )

    assert response.status_code == 200
    recipe = response.json()["recipe"]
    assert recipe["title"] == "Tomato Rice"
    assert recipe["prep_time"] == 10
    assert recipe["tags"] == ["quick", "vegan"]

    prompt = generator.calls[0]["prompt"]
    assert "rice, tomato" in prompt
    assert "Cuisine style" not in prompt
    assert "Servings: 2." in prompt


def test_generate_recipe_blank_ingredients(client: TestClient, generator):
    response = client.post("/ai/generate-recipe", json={"ingredients": "  "})
    assert response.status_code == 400
    assert generator.calls == []


@pytest.mark.parametrize(
    "body",
    (
        {},
        {"ingredients": "eggs", "servings": 21},
        {"ingredients": "eggs", "difficulty": "impossible"},
    ),
)
def test_generate_recipe_invalid_body(client: TestClient, body):
    response = client.post("/ai/generate-recipe", json=body)
    assert response.status_code == 422
    assert response.json()["error"] == "Validation error"


@pytest.mark.parametrize(
    "reply",
    (
        "I'd rather not.",
        "{ invalid json",
        '{"description": "no title"}',
    ),
)
def test_unusable_output_is_uniform_502(client: TestClient, generator, reply):
    generator.reply = reply

    response = client.post("/ai/generate-recipe", json={"ingredients": "eggs"})

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["error"] == GENERATION_FAILED
    assert detail["request_id"] == response.headers["X-Request-ID"]


def test_provider_failure_is_uniform_502(client: TestClient, generator):
    generator.error = ProviderError("anthropic returned HTTP 429", provider="anthropic", status_code=429)

    response = client.post("/ai/generate-recipe", json={"ingredients": "eggs"})

    assert response.status_code == 502
    assert response.json()["detail"]["error"] == GENERATION_FAILED
    assert "429" not in response.text


def test_meal_plan(client: TestClient, generator):
    generator.reply = (
        "```json\n"
        '{"Monday": {"breakfast": "Oats", "lunch": "Pasta", "dinner": "Soup"},'
        ' "Tuesday": {"breakfast": "Eggs", "lunch": "Soup", "dinner": "Pasta"},'
        ' "Wednesday": {"breakfast": "Toast", "lunch": "Salad", "dinner": "Curry", "snack": "Nuts"}}\n'
        "```"
    )

    response = client.post(
        "/ai/meal-plan",
        json={"recipes": [{"title": "Pasta"}, {"title": "Soup", "cuisine_type": "French"}], "days": 3},
    )

    assert response.status_code == 200
    plan = response.json()["plan"]
    assert list(plan) == ["Monday", "Tuesday", "Wednesday"]
    assert plan["Wednesday"]["snack"] == "Nuts"
    assert plan["Monday"]["snack"] is None


def test_meal_plan_rejects_other_lengths(client: TestClient):
    response = client.post("/ai/meal-plan", json={"recipes": [], "days": 4})
    assert response.status_code == 422


def test_nutrition(client: TestClient, generator):
    generator.reply = NUTRITION_JSON

    response = client.post(
        "/ai/nutrition",
        json={"ingredients": [{"name": "flour", "amount": "2", "unit": "cups"}], "servings": 4},
    )

    assert response.status_code == 200
    assert response.json()["nutrition"] == {
        "calories": 450,
        "protein": "25g",
        "carbs": "30g",
        "fat": "10g",
        "fiber": "5g",
    }
    assert generator.calls[0]["fast"] is True


def test_nutrition_without_named_ingredients(client: TestClient):
    response = client.post("/ai/nutrition", json={"ingredients": [{"name": ""}]})
    assert response.status_code == 400


def test_substitutions_returns_text_verbatim(client: TestClient, generator):
    generator.reply = "Use applesauce (1:1). Note: {not json}"

    response = client.post("/ai/substitutions", json={"ingredient": "egg", "recipe": "Brownies"})

    assert response.status_code == 200
    assert response.json() == {"substitution": "Use applesauce (1:1). Note: {not json}"}
    assert 'in a recipe called "Brownies"' in generator.calls[0]["prompt"]


def test_substitutions_provider_failure(client: TestClient, generator):
    generator.error = ProviderError("timeout", provider="groq")

    response = client.post("/ai/substitutions", json={"ingredient": "egg"})

    assert response.status_code == 502
    assert response.json()["detail"]["error"] == GENERATION_FAILED


def test_rate_limit_follows_app_settings(test_settings, generator):
    limited = create_app(test_settings.model_copy(update={"rate_limit_per_hour": 1}), text_generator=generator)
    client = TestClient(limited)

    statuses = [client.post("/ai/substitutions", json={"ingredient": "egg"}).status_code for _ in range(3)]

    assert statuses == [200, 429, 429]


def test_rate_limit_is_per_app(test_settings, generator):
    def app_with_limit(per_hour: int) -> TestClient:
        settings = test_settings.model_copy(update={"rate_limit_per_hour": per_hour})
        return TestClient(create_app(settings, text_generator=generator))

    strict, relaxed = app_with_limit(1), app_with_limit(5)

    assert strict.post("/ai/substitutions", json={"ingredient": "egg"}).status_code == 200
    assert strict.post("/ai/substitutions", json={"ingredient": "egg"}).status_code == 429
    assert relaxed.post("/ai/substitutions", json={"ingredient": "egg"}).status_code == 200


def test_share_requires_supabase(client: TestClient):
    response = client.post(
        "/recipes/share",
        json={"recipeId": "r-1", "shareEmail": "friend@example.com"},
        headers={"Authorization": "Bearer good-token"},
    )
    assert response.status_code == 503


def test_share_requires_token(sharing_client: TestClient):
    response = sharing_client.post("/recipes/share", json={"recipeId": "r-1", "shareEmail": "friend@example.com"})
    assert response.status_code == 401


def test_share_rejects_invalid_token(sharing_client: TestClient):
    response = sharing_client.post(
        "/recipes/share",
        json={"recipeId": "r-1", "shareEmail": "friend@example.com"},
        headers={"Authorization": "Bearer bad-token"},
    )
    assert response.status_code == 401


def test_share_recipe(sharing_client: TestClient, supabase):
    response = sharing_client.post(
        "/recipes/share",
        json={"recipeId": "r-1", "shareEmail": "friend@example.com"},
        headers={"Authorization": "Bearer good-token"},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Recipe shared with friend@example.com successfully!"}
    assert any(c[0] == "recipe_shares" and c[2]["shared_by"] == "user-1" for c in supabase.calls)


def test_share_invalid_email(sharing_client: TestClient):
    response = sharing_client.post(
        "/recipes/share",
        json={"recipeId": "r-1", "shareEmail": "not-an-email"},
        headers={"Authorization": "Bearer good-token"},
    )
    assert response.status_code == 400


def test_deeply_nested_output_is_uniform_502(client: TestClient, generator):
    generator.reply = '{"title": "x", "instructions": ' + "[" * 100000 + "]" * 100000 + "}"

    response = client.post("/ai/generate-recipe", json={"ingredients": "eggs"})

    assert response.status_code == 502
    assert response.json()["detail"]["error"] == GENERATION_FAILED
