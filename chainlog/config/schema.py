"""Configuration schema using Pydantic."""

from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chainlog.ledger.commit import DEFAULT_TIMESTAMP_FORMAT


class LedgerConfig(BaseModel):
    """Commit ledger configuration."""
    id_start: int = 0  # First commit id handed out
    clock: Literal["system", "logical"] = "system"
    logical_step_seconds: float = 1.0  # Only used by the logical clock
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    history_default: int = 10  # Lines shown when no count is given

    @field_validator("id_start")
    @classmethod
    def validate_id_start(cls, v: int) -> int:
        """Validate id_start is non-negative."""
        if v < 0:
            raise ValueError("id_start must be non-negative")
        return v

    @field_validator("logical_step_seconds")
    @classmethod
    def validate_step(cls, v: float) -> float:
        """Validate the logical clock step is positive."""
        if v <= 0:
            raise ValueError("logical_step_seconds must be positive")
        return v

    @field_validator("history_default")
    @classmethod
    def validate_history_default(cls, v: int) -> int:
        """Validate history_default is at least 1."""
        if v < 1:
            raise ValueError("history_default must be at least 1")
        return v

    @property
    def logical_step(self) -> timedelta:
        return timedelta(seconds=self.logical_step_seconds)


class Config(BaseSettings):
    """Root configuration for chainlog."""
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)

    model_config = SettingsConfigDict(
        env_prefix="CHAINLOG_",
        env_nested_delimiter="__",
    )
