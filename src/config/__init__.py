"""
Configuration module for the clothing recommendation engine.

This module provides centralized configuration management using pydantic-settings.
Engine tuning values and user defaults should be accessed through this module.

Usage:
    from config import get_settings

    settings = get_settings()
    floor = settings.min_similarity
"""

from config.settings import Settings, get_settings, get_settings_for_testing

__all__ = ["Settings", "get_settings", "get_settings_for_testing"]
