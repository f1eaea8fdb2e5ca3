from datetime import date

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "dev"
    database_url: str = "sqlite:///./pitwall.db"
    season: int = date.today().year
    log_level: str = "INFO"
    fastf1_cache_dir: str | None = None

    class Config:
        env_file = ".env"
        env_prefix = ""
        case_sensitive = False

settings = Settings()
