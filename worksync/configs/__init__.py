"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from worksync.configs.settings import Settings, get_settings
from worksync.configs.sync_client import SyncClientSettings

__all__ = ["Settings", "SyncClientSettings", "get_settings"]
