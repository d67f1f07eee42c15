from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    user_timezone: str = "UTC"
    log_level: str = "INFO"

    # Sentry error tracking
    sentry_dsn: str = ""
    sentry_environment: str = "production"

    # Suggestions are only generated below this score (points out of 100)
    confidence_threshold: int = 70

    default_preset: str = "general"
    default_event_time: str = "09:00"
    default_event_duration_minutes: int = 60

    @property
    def has_sentry(self) -> bool:
        return bool(self.sentry_dsn)

    @property
    def default_event_hour_minute(self) -> tuple[int, int]:
        hour, _, minute = self.default_event_time.partition(":")
        return int(hour), int(minute or 0)


settings = Settings()
