from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "hopeclub"
    APP_VERSION: str = "1.0.0"

    DATABASE_URL: str = "sqlite:///hopeclub.db"
    SQL_ECHO: bool = False
    SQLITE_BUSY_TIMEOUT: float = 15.0

    # Tokens are issued by the external auth provider; we only decode them.
    SECRET_KEY: str = "dev-secret-key-change-me"
    JWT_ALGORITHM: str = "HS256"
    AUTH_COOKIE_NAME: str = "access_token"
    ROLE_CLAIM: str = "role"

    RECENT_ACTIVITY_LIMIT: int = 50
    RECENT_ACTIVITY_MAX: int = 500

    LOG_LEVEL: str = "INFO"


settings = Settings()
