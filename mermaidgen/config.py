"""Process-wide configuration for the diagram service."""

from typing import Annotated, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class GenerationSettings(BaseModel):
    """Sampling parameters sent with every generation request."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=0.1, ge=0.0, le=1.0)
    top_k: int = Field(default=1, ge=1)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=2048, ge=1)

    def with_options(
        self,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> "GenerationSettings":
        """Return a copy with per-request overrides applied."""
        update = {}
        if temperature is not None:
            update["temperature"] = temperature
        if max_output_tokens is not None:
            update["max_output_tokens"] = max_output_tokens
        if not update:
            return self
        return self.model_copy(update=update)


class SafetyThreshold(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    threshold: str = "BLOCK_MEDIUM_AND_ABOVE"


DEFAULT_SAFETY_SETTINGS = (
    SafetyThreshold(category="HARM_CATEGORY_HARASSMENT"),
    SafetyThreshold(category="HARM_CATEGORY_HATE_SPEECH"),
    SafetyThreshold(category="HARM_CATEGORY_SEXUALLY_EXPLICIT"),
    SafetyThreshold(category="HARM_CATEGORY_DANGEROUS_CONTENT"),
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or a .env file.

    Nested values use a double underscore, e.g. ``GENERATION__TEMPERATURE=0.3``.
    The instance is frozen: it is built once at startup and shared read-only.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    app_name: str = "Mermaid Diagram Generator"

    # Gemini
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    generation: GenerationSettings = GenerationSettings()
    safety_settings: Tuple[SafetyThreshold, ...] = DEFAULT_SAFETY_SETTINGS

    # Server
    allowed_origins: Annotated[List[str], NoDecode] = ["http://localhost:3000"]
    port: int = 8000
    log_level: str = "INFO"

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        """Accept a comma-separated string, e.g. ALLOWED_ORIGINS=http://a,http://b"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    def __repr__(self) -> str:
        # Keep the API key out of logs
        return f"Settings(gemini_model='{self.gemini_model}', log_level='{self.log_level}')"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
