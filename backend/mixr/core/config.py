"""
Configuration module for the MIXR API.
Loads settings from environment variables.
"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings
from functools import lru_cache


class GenerationBackend(str, Enum):
    """Supported text-generation backends."""
    OPENAI = "openai"
    LM_STUDIO = "lm_studio"
    OLLAMA = "ollama"


class GenerationConfig(BaseModel):
    """Explicit configuration for the generation client."""
    backend: GenerationBackend = GenerationBackend.OPENAI
    base_url: str
    model: str
    api_key: Optional[str] = None
    temperature: float = 0.8
    timeout_seconds: float = Field(default=60.0, gt=0)

    model_config = ConfigDict(frozen=True, protected_namespaces=())


# Used when no explicit base URL / model is configured
BACKEND_DEFAULTS = {
    GenerationBackend.OPENAI: ("https://api.openai.com/v1", "gpt-4"),
    GenerationBackend.LM_STUDIO: ("http://localhost:1234/v1", "qwen-32b-everything"),
    GenerationBackend.OLLAMA: ("http://localhost:11434", "llama3:latest"),
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 6174
    cors_origins: str = "*"
    log_level: str = "INFO"

    # Database (use relative path or set via environment variable)
    database_url: str = "sqlite:///./mixr.db"

    # Authentication happens at the gateway; set AUTH_DISABLED=true in dev to use a fixed dev user
    auth_disabled: bool = False

    # Generation backend
    llm_backend: GenerationBackend = GenerationBackend.OPENAI
    llm_base_url: Optional[str] = None
    llm_model: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_temperature: float = 0.8
    llm_timeout_seconds: float = 60.0

    class Config:
        env_file = ".env"
        case_sensitive = False

    def cors_origin_list(self) -> List[str]:
        """Split the comma-separated CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def generation_config(self) -> GenerationConfig:
        """Build the generation client configuration from these settings."""
        default_url, default_model = BACKEND_DEFAULTS[self.llm_backend]
        return GenerationConfig(
            backend=self.llm_backend,
            base_url=self.llm_base_url or default_url,
            model=self.llm_model or default_model,
            api_key=self.llm_api_key,
            temperature=self.llm_temperature,
            timeout_seconds=self.llm_timeout_seconds,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
