from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RIM_TOOL_")

    # Used by the manifest builder when -c / -a are given without a path
    default_output_file: str = "generated_swidTag.swidtag"
    default_attributes_file: str = "rim_fields.json"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    # Thread pool size for rim-digest file
    digest_workers: int = 4

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

settings = Settings()
