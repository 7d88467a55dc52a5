from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BOOKINGS_API_BASE_URL: str = "http://localhost:5000"
    BOOKINGS_API_TIMEOUT_SECONDS: float = 5.0

    LOCAL_STORE_PROVIDER: str = "json"  # "json" | "memory"
    LOCAL_STORAGE_DIR: str = "./data/local_storage"
    BOOKINGS_STORAGE_KEY: str = "app_booking_requests"

    DEFAULT_TIME_FORMAT: str = "12"  # "12" | "24"


settings = Settings()
