import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # The only credential the backend needs
    openai_api_key: Optional[str] = None
    openai_api_url: str = "https://api.openai.com/v1/chat/completions"
    openai_model: str = "gpt-4o-mini"
    request_timeout: float = 60.0

    # Local key/value storage, or S3 when a bucket is configured
    storage_dir: str = "data"
    bucket_name: Optional[str] = None
    s3_region: str = "us-east-1"
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_prefix: str = "clarityworks"

    crm_mock_delay: float = 1.5  # seconds
    max_documents: int = 3
    default_advisor: str = "Sarah Mitchell"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=Path(
            Path(__file__).parent.resolve(),
            os.environ.get("ENV_FILE", ".env")
        ),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def use_s3(self) -> bool:
        return bool(self.bucket_name and self.s3_access_key and self.s3_secret_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
