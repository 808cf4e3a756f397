from typing import TYPE_CHECKING, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from shiftboard.services.scheduling.types import PairedShiftConfig


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./shiftboard.db"

    # Scheduling
    APP_TIMEZONE: str = "America/Los_Angeles"
    RETENTION_DAYS: int = 28

    # Paired split shift (one location/position only)
    PAIRED_LOCATION_ID: Optional[str] = None
    PAIRED_POSITION_ID: Optional[str] = None
    PAIRED_TEMPLATE_ID_1: Optional[str] = None
    PAIRED_TEMPLATE_ID_2: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def paired_shift_config(self) -> Optional["PairedShiftConfig"]:
        """Explicit paired-shift config, or None unless all four ids are set."""
        # imported here: the scheduling package imports the db layer, which imports settings
        from shiftboard.services.scheduling.types import PairedShiftConfig

        ids = (
            self.PAIRED_LOCATION_ID,
            self.PAIRED_POSITION_ID,
            self.PAIRED_TEMPLATE_ID_1,
            self.PAIRED_TEMPLATE_ID_2,
        )
        if not all(ids):
            return None
        return PairedShiftConfig(
            location_id=self.PAIRED_LOCATION_ID,
            position_id=self.PAIRED_POSITION_ID,
            first_template_id=self.PAIRED_TEMPLATE_ID_1,
            second_template_id=self.PAIRED_TEMPLATE_ID_2,
        )


settings = Settings()
