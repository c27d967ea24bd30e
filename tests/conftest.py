"""
Pytest configuration and shared fixtures for the recommendation engine tests.
"""
import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


# ============================================================================
# Fixtures: Settings & Engine
# ============================================================================

@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    from config.settings import get_settings_for_testing

    return get_settings_for_testing()


@pytest.fixture
def engine(settings):
    """Engine built from test settings."""
    from recommendation.engine import RecommendationEngine

    return RecommendationEngine(settings)


@pytest.fixture
def safety():
    from recommendation.safety import SafetyOverrideEngine

    return SafetyOverrideEngine()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Keep bound log context from leaking between tests."""
    from core.logging import clear_context

    clear_context()
    yield
    clear_context()
