# skintriage/core/config.py

from typing import Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Supabase settings (registry, storage, identity)
    SUPABASE_URL: str = Field(...)
    SUPABASE_ANON_KEY: str = Field(...)
    REGISTRY_TIMEOUT_SECONDS: float = Field(default=10.0)

    # Storage settings
    STORAGE_URL: Optional[str] = Field(default=None)  # defaults to SUPABASE_URL
    STORAGE_BUCKET: str = Field(default="medical-images")
    STORAGE_ENFORCE_OWNER_FOLDER: bool = Field(default=True)

    # Auth/JWT settings
    JWT_SECRET: str = Field(...)
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_AUDIENCE: str = Field(default="authenticated")

    # OpenAI settings
    OPENAI_API_KEY: Optional[str] = Field(default=None)
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1")

    # Vision model settings
    VISION_MODEL: str = Field(default="gpt-4o")
    VISION_MAX_TOKENS: int = Field(default=1000)
    VISION_TEMPERATURE: float = Field(default=0.3)
    VISION_TIMEOUT_SECONDS: float = Field(default=60.0)

    # Geo-match settings
    GEO_FALLBACK_POLICY: Literal["synthetic_fill", "disabled"] = Field(default="synthetic_fill")

    # Server settings
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    LOG_LEVEL: str = Field(default="INFO")

    @property
    def storage_url(self) -> str:
        return self.STORAGE_URL or self.SUPABASE_URL

settings = Settings()
