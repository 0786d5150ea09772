"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest
import json

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def forecast_payload(fixtures_dir):
    """Load a sample OpenWeatherMap forecast response from fixtures."""
    data_file = fixtures_dir / "forecast_sample.json"
    with open(data_file, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep host configuration out of the tests."""
    for name in ("CONFIG_FILE", "OWM_API_KEY", "OWM_BASE_URL",
                 "AGRIMOGA_STORAGE_DIR", "AGRIMOGA_LANG", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
