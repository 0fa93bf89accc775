"""Application configuration using pydantic-settings.

Every value can be overridden through the environment:
    ANIMEAPI_PROVIDERS__FLV_URL=https://www3.animeflv.net
    ANIMEAPI_HTTP__TIMEOUT=15
    ANIMEAPI_SERVER__PORT=8080
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseModel):
    """Provider roots and which providers are served."""

    flv_url: str = Field("https://www2.animeflv.bz", description="AnimeFLV site root")
    otakudesu_url: str = Field("https://otakudesu.best", description="Otakudesu site root")
    enabled: List[str] = Field(
        default_factory=lambda: ["flv", "otakudesu"],
        description="Provider ids exposed by the registry",
    )


class HttpSettings(BaseModel):
    """Outbound fetch configuration."""

    timeout: Optional[float] = Field(
        None,
        description="Request timeout in seconds; None keeps the client default",
    )


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(3000, ge=1, le=65535)
    debug: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ANIMEAPI_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    log_level: str = "INFO"


settings = Settings()
