"""
Updater Configuration
"""

from pydantic import BaseModel, Field, field_validator

from statesugar.protocol.path import DEFAULT_DELIMITERS


class UpdaterConfig(BaseModel):
    """
    Configuration for an Updater.
    """
    delimiters: str = Field(DEFAULT_DELIMITERS, description="Characters that separate keys in string paths")
    log_level: str = Field("WARNING", description="structlog filtering level")
    json_logs: bool = False

    @field_validator("delimiters")
    @classmethod
    def _check_delimiters(cls, value: str) -> str:
        if not value:
            raise ValueError("delimiters must contain at least one character")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level
