from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, case_sensitive=False)

    # App
    app_name: str = "User Directory"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./users.db"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 50051
    shutdown_timeout_seconds: int = 5


settings = Settings()
