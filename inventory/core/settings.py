from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    CACHE_DIR: Path = Path("cache")
    LOG_DIR: Path = Path("logs")
    LOG_FILE: str = "inventory.log"
    LOG_MAX_BYTES: int = 10_000_000
    LOG_BACKUP_COUNT: int = 5
    LOG_LEVEL: str = "INFO"
    DISCORD_WEBHOOK_URL: str | None = None
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", env_prefix="INVENTORY_", frozen=True, extra="ignore")

    @property
    def photos_dir(self) -> Path:
        return self.CACHE_DIR / "photos"


settings = Settings()
