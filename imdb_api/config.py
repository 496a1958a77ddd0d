from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    OMDB_API_KEY: Optional[str] = None
    OMDB_TIMEOUT_MS: Optional[int] = None

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore"
    )


settings = Settings()
