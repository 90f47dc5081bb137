"""Configuration management for termsite.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides.
"""

from termsite.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
