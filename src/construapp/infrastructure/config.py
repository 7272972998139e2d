"""Deployment configuration.

Built once at process start from ``CONSTRUAPP_*`` environment variables
(or an ``.env`` file) and passed explicitly to the composition root.
Nothing else in the package reads the environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from construapp.domain.model.cart import PricePolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CONSTRUAPP_", env_file=".env", extra="ignore")

    app_id: str = "default-app-id"
    database_url: Optional[str] = None
    database_name: str = "construapp"
    initial_auth_token: Optional[str] = None
    auth_secret: Optional[str] = None
    data_dir: Path = Path("data")
    notification_ttl: float = Field(default=3.0, gt=0)
    price_policy: PricePolicy = PricePolicy.SNAPSHOT
    connect_timeout_ms: int = Field(default=3000, gt=0)

    def collection_name(self, name: str) -> str:
        """Tenant-scoped collection name, e.g. ``default-app-id.products``."""
        return f"{self.app_id}.{name}"
