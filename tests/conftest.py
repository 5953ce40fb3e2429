"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from fakes import FakeSupabase, FakeTextGenerator, RECIPE_JSON
from recipebox.config import Settings
from recipebox.main import create_app
from recipebox.middleware.rate_limit import limiter


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """The limiter is module-global; start every test with empty counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(llm_provider="gemini", gemini_api_key="", supabase_url="", supabase_key="")


@pytest.fixture
def generator() -> FakeTextGenerator:
    return FakeTextGenerator(reply=RECIPE_JSON)


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase(profiles=[{"id": "user-2", "username": "friend"}])


@pytest.fixture
def client(test_settings, generator):
    """Test client without Supabase configured."""
    app = create_app(test_settings, text_generator=generator)
    return TestClient(app)


@pytest.fixture
def sharing_client(test_settings, generator, supabase):
    """Test client wired to a fake Supabase."""
    app = create_app(test_settings, text_generator=generator, supabase_client=supabase)
    return TestClient(app)
