"""Runtime settings for the training engine.

Values come from environment variables (or a local .env file):
- LOG_LEVEL / LOG_FILE: logging configuration
- DATABASE_URL: storage for plans, history and preferences (SQLite by default)
- DUPLICATE_TOLERANCE_SECONDS: window for merging external workouts
- DEFAULT_SOURCE_PRIORITY: comma-separated health source ranking
- DEFAULT_PLAN_WEEKS, STATS_WEEKLY_WINDOW, STATS_MONTHLY_WINDOW: planning and stats defaults
"""

from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_database_url() -> str:
    """Build the default SQLite URL next to the project root.

    SQLite is fine for this engine: a single user, a handful of plans.
    Set DATABASE_URL to point somewhere else.
    """
    db_path = Path(__file__).parent.parent.parent / "train.db"
    return f"sqlite:///{db_path.resolve()}"


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    database_url: str = Field(default_factory=_default_database_url, validation_alias="DATABASE_URL")

    duplicate_tolerance_seconds: float = Field(
        default=300.0,
        validation_alias="DUPLICATE_TOLERANCE_SECONDS",
        description="Start times closer than this are treated as the same workout",
    )
    default_source_priority: str = Field(
        default="Apple Watch,Garmin Connect,Strava",
        validation_alias="DEFAULT_SOURCE_PRIORITY",
        description="Comma-separated source names, most trusted first",
    )
    default_plan_weeks: int = Field(default=8, validation_alias="DEFAULT_PLAN_WEEKS")
    stats_weekly_window: int = Field(default=10, validation_alias="STATS_WEEKLY_WINDOW")
    stats_monthly_window: int = Field(default=12, validation_alias="STATS_MONTHLY_WINDOW")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("duplicate_tolerance_seconds")
    @classmethod
    def validate_tolerance(cls, value: float) -> float:
        """Reject negative tolerance windows."""
        if value < 0:
            raise ValueError(f"DUPLICATE_TOLERANCE_SECONDS must be >= 0, got {value}")
        return value

    @field_validator("default_plan_weeks", "stats_weekly_window", "stats_monthly_window")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Windows and plan lengths must be at least one period."""
        if value < 1:
            raise ValueError(f"Value must be >= 1, got {value}")
        return value

    @property
    def source_priority(self) -> list[str]:
        """Default source priority as a list, most trusted first."""
        return [name.strip() for name in self.default_source_priority.split(",") if name.strip()]


settings = Settings()
