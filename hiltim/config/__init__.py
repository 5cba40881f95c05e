"""
Configuration package for the hotel booking backend.

Contains environment settings and logging configuration.
"""

from hiltim.config.settings import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
