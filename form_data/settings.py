from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Log level for the form data service",
    )
    log_json: bool = Field(
        default=False,
        validation_alias="LOG_JSON",
        description="Emit structured JSON logs when true",
    )
    default_formatter: Literal["multipart", "url_encoded"] = Field(
        default="multipart",
        validation_alias="FORM_DATA_DEFAULT_FORMATTER",
        description="Formatter used when a request does not name one",
    )
    url_encoding: str = Field(
        default="utf-8",
        validation_alias="FORM_DATA_URL_ENCODING",
        description="Character encoding of url-encoded bodies",
    )
    url_quote_plus: bool = Field(
        default=True,
        validation_alias="FORM_DATA_QUOTE_PLUS",
        description="Encode spaces as '+' instead of '%20' in url-encoded bodies",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        if value in (None, ""):
            return "INFO"
        return str(value).strip().upper()

    @field_validator("url_encoding", mode="before")
    @classmethod
    def _normalize_encoding(cls, value: str | None) -> str:
        if value in (None, ""):
            return "utf-8"
        return str(value).strip().lower()


settings = Settings()
