from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://recovery:recovery@db:5432/recovery"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # IANA zone used to decide what "today" is for relative labels.
    TIMEZONE: str = "UTC"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://journal.example.com,https://admin.example.com"
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
