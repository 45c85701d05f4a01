from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str
    db_echo: bool = False

    # JWT
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_access_expire_minutes: int = 30
    jwt_refresh_expire_days: int = 7

    # Statement upload
    csv_max_size_mb: int = 5
    upload_batch_size: int = 500
    default_source: str = "JCB"

    # Household every new member joins
    shared_household_id: str = "11111111-1111-1111-1111-111111111111"
    shared_household_name: str = "Shared household"

    # Money / amounts
    currency: str = "JPY"
    currency_minor_unit: int = 0


settings = Settings()
