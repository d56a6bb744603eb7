from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Storage backend: "memory" | "file" | "redis"
    STORAGE_BACKEND: str = "file"
    STORAGE_PATH: str = ".crowd_signal/storage.json"
    REDIS_URL: str = "redis://localhost:6379/0"

    # Storage keys: bump the version suffix to invalidate old payloads
    MARKETS_STORAGE_KEY: str = "crowd-signal-markets-v3"
    USER_ID_STORAGE_KEY: str = "prediction-user-id"

    # Caller-layer rules
    DELETE_CONFIRM_TEXT: str = "delete"
    DEFAULT_CATEGORY: str = "General"
    QUESTION_MAX_LENGTH: int = 200
    CATEGORY_MAX_LENGTH: int = 30

    # App
    APP_NAME: str = "Crowd Signal"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False  # forces DEBUG log level when set


settings = Settings()
