"""FastAPI dependency injection."""

from src.config import settings
from src.models.schedule import DayCountConvention


def get_convention() -> DayCountConvention:
    return settings.convention
