from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    app_name: str = "Taskboard Admin"
    secret_key: str = "change-me"
    session_cookie_name: str = "taskboard_session"

    # Data service
    database_url: str = "sqlite:///./taskboard.db"
    seed_users: list[str] = ["Admin"]

    # Console -> data service
    api_base_url: str = "http://localhost:8000/api"
    api_timeout: float | None = None

    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None

    # Console: live admin panels kept in memory (least recently used dropped)
    max_panels: int = 256

    model_config = SettingsConfigDict(env_prefix="TASKBOARD_", env_file=".env", extra="ignore")

settings = Settings()
