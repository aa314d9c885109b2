from pydantic_settings import BaseSettings

from src.models.schedule import DayCountConvention


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Day-count convention (simplified: every month is 30 days)
    days_in_week: int = 7
    days_in_month: int = 30

    @property
    def convention(self) -> DayCountConvention:
        return DayCountConvention(
            days_in_week=self.days_in_week,
            days_in_month=self.days_in_month,
        )


settings = Settings()
