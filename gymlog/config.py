from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GYMLOG_", env_file=".env", extra="ignore")

    database_url: str = "sqlite:///gym_log_book.db"
    log_level: str = "INFO"
    # Histories are scrollable, so the exercise card asks for a long one.
    history_limit: int = 2000


settings = Settings()
