from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default=["*"], validation_alias="CORS_ALLOW_ORIGINS")

    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, validation_alias="OPENAI_BASE_URL")
    openai_timeout_seconds: float | None = Field(default=None, validation_alias="OPENAI_TIMEOUT_SECONDS")
    openai_image_model: str = Field(default="dall-e-3", validation_alias="OPENAI_IMAGE_MODEL")
    openai_image_size: str = Field(default="1792x1024", validation_alias="OPENAI_IMAGE_SIZE")
    openai_large_text_model: str = Field(default="gpt-4-turbo", validation_alias="OPENAI_LARGE_TEXT_MODEL")
    openai_small_text_model: str = Field(default="gpt-3.5-turbo", validation_alias="OPENAI_SMALL_TEXT_MODEL")
    openai_text_temperature: float = Field(default=0.7, validation_alias="OPENAI_TEXT_TEMPERATURE")

    gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    gemini_text_model: str = Field(default="gemini-1.5-flash", validation_alias="GEMINI_TEXT_MODEL")

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        # Comma-separated in the environment, e.g. "http://a,http://b".
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


settings = Settings()
