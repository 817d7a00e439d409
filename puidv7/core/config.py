"""Application configuration loaded from environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Prefix registry (relative to project root)
    prefixes_file: str = "prefixes.yaml"

    # Service
    host: str = "0.0.0.0"
    port: int = 9210
    log_level: str = "INFO"

    @property
    def project_root(self) -> Path:
        return Path(__file__).parent.parent.parent

    model_config = {"env_file": ".env", "env_prefix": "PUIDV7_", "extra": "ignore"}


settings = Settings()
