"""Application configuration loaded from the environment."""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class CropScapeConfig(BaseSettings):
    """Upstream CropScape point-query service configuration."""

    model_config = {"env_prefix": "CDLHISTORY_CROPSCAPE_"}

    provider: str = "cropscape"
    base_url: str = "https://nassgeodata.gmu.edu/axis2/services/CDLService"
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=0, ge=0)
    user_agent: str = "cdl-history/0.1"


class HistoryConfig(BaseSettings):
    """Year window and ordering for multi-year history scans."""

    model_config = {"env_prefix": "CDLHISTORY_HISTORY_"}

    start_year: int = 2008
    end_year: int = 2023
    newest_first: bool = False

    @model_validator(mode="after")
    def _check_window(self) -> HistoryConfig:
        if self.start_year > self.end_year:
            raise ValueError(
                f"start_year {self.start_year} is after end_year {self.end_year}"
            )
        return self

    def years(self) -> list[int]:
        """Years in query order, newest first."""
        return list(range(self.end_year, self.start_year - 1, -1))


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "CDLHISTORY_"}

    environment: str = "development"
    debug: bool = False

    cropscape: CropScapeConfig = Field(default_factory=CropScapeConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
