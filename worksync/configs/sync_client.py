"""
Sync client configuration settings.

Settings for the device-side Session State Manager: where the server lives,
how long a single sync request may take, how often to sweep while online and
where pending progress is persisted.

Dependencies: pydantic, pydantic_settings
System role: Offline client configuration
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from worksync.configs.base import BaseSettings


class SyncClientSettings(BaseSettings):
    """Offline sync client configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WORKSYNC_CLIENT_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:8082/api/v1",
        description="Server API root the sync transport posts to",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for a single sync request",
    )
    sync_interval_seconds: float = Field(
        default=60.0,
        ge=0,
        description="Periodic sweep interval while online (0 disables)",
    )
    probe_interval_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Interval between connectivity health probes",
    )
    max_concurrency: int = Field(
        default=4,
        ge=1,
        description="Maximum number of sync requests in flight during a sweep",
    )
    storage_dir: Path = Field(
        default=Path(".worksync"),
        description="Directory holding device-local progress records",
    )
