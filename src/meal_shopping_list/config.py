from __future__ import annotations
from typing import Literal, Optional
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    provider: Literal["anthropic", "mistral"] = "anthropic"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5"
    mistral_api_key: str = ""
    mistral_model: str = "mistral-small-latest"
    mistral_base_url: str = "https://api.mistral.ai"
    max_tokens: int = 4096
    request_timeout: Optional[float] = 60.0
    id_strategy: Literal["sequential", "random"] = "sequential"

    @model_validator(mode="after")
    def require_api_key(self) -> "Config":
        if self.provider == "anthropic" and not self.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable is required")
        if self.provider == "mistral" and not self.mistral_api_key:
            raise ValueError("MISTRAL_API_KEY environment variable is required")
        return self
