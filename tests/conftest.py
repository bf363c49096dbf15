"""Shared pytest fixtures and configuration."""

import pytest
from unittest.mock import Mock

from models.config_models import Config, CredentialsConfig


@pytest.fixture
def test_env(monkeypatch):
    """
    Set valid test environment variables.
    
    This fixture sets up valid test environment variables so config
    can be loaded during tests without requiring real credentials.
    """
    monkeypatch.setenv("SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "test_supabase_key_1234567890")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("RESOURCE_TABLE", raising=False)
    monkeypatch.delenv("RESOURCE_ORDER_BY", raising=False)
    
    return {
        "supabase_url": "https://test-project.supabase.co",
        "supabase_key": "test_supabase_key_1234567890",
        "log_level": "DEBUG",
    }


@pytest.fixture
def invalid_env(monkeypatch):
    """
    Set up invalid/missing environment variables for testing validation.
    """
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_KEY", "")


@pytest.fixture
def test_config():
    """Validated config that does not touch the environment."""
    return Config(
        credentials=CredentialsConfig(
            supabase_url="https://test-project.supabase.co",
            supabase_key="test_supabase_key_1234567890",
        ),
        log_level="DEBUG",
    )


@pytest.fixture
def mock_data():
    """Five resources used across the table tests."""
    return [
        {"id": 1, "source_name": "Test Source 1", "category": "Category A", "field": "Field 1"},
        {"id": 2, "source_name": "Test Source 2", "category": "Category B", "field": "Field 2"},
        {"id": 3, "source_name": "Another Source", "category": "Category A", "field": "Field 3"},
        {"id": 4, "source_name": "Different Source", "category": "Category C", "field": "Field 1"},
        {"id": 5, "source_name": "Final Source", "category": "Category B", "field": "Field 4"},
    ]


@pytest.fixture
def mock_supabase(mock_data):
    """Mock SupabaseClient returning the five test resources."""
    mock = Mock()
    mock.get_all_resources.return_value = mock_data
    mock.get_resource.return_value = None
    mock.get_resource_stats.return_value = {"total": 0, "categories": {}}
    return mock
