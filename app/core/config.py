from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "MonthlyFinance"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Blob store (memory | file | s3)
    STORAGE_BACKEND: str = Field(default="memory")
    STORAGE_KEY: str = Field(default="transactions")
    STORAGE_DIR: str = Field(default="data")

    # AWS S3
    S3_BUCKET_NAME: str = Field(default="monthly-finance-state")
    S3_REGION: str = Field(default="eu-west-1")
    S3_PREFIX: str = Field(default="state/")

    # Gemini advice
    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash")
    ADVICE_RECENT_LIMIT: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
