from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CAFETERIA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    # Storage: one <collection>.json file per collection
    data_dir: Path = Path("data")
    backup_enabled: bool = True
    backup_keep: int = 5  # timestamped .bak.json copies kept per collection

    # Seed empty collections with demo data when the back office is opened
    seed_on_init: bool = False

    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings()
