"""Settings for the decisions command line, read from the environment."""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from decisions.logging import LogLevel


class DecisionsSettings(BaseSettings):
    """Defaults for training and depth selection.

    Every field can be set through a `DECISIONS_`-prefixed environment
    variable (e.g. `DECISIONS_FOLDS=5`) or a `.env` file. Command line flags
    take precedence over these values.

    Attributes:
        folds (int): Number of cross-validation folds used by depth sweeps.
        min_depth (int): Smallest maximum depth tried by a sweep.
        max_depth (int): Largest maximum depth tried by a sweep.
        max_workers (int | None): Threads used to sweep depths; `None` runs
            candidates one after another.
        log_level (LogLevel): Minimum level of log records printed to stderr.
    """

    model_config = SettingsConfigDict(
        env_prefix="DECISIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    folds: int = Field(default=10, ge=2, description="Number of cross-validation folds used by depth sweeps.")
    min_depth: int = Field(default=1, ge=1, description="Smallest maximum depth tried by a sweep.")
    max_depth: int = Field(default=10, ge=1, description="Largest maximum depth tried by a sweep.")
    max_workers: int | None = Field(default=None, ge=1, description="Threads used to sweep depths.")
    log_level: LogLevel = Field(default="TRAINING", description="Minimum level of log records printed.")

    @model_validator(mode="after")
    def _validate_depth_range(self) -> DecisionsSettings:
        """Validate that the sweep range is not empty.

        Returns:
            DecisionsSettings: The validated settings.

        Raises:
            ValueError: If `min_depth` exceeds `max_depth`.
        """
        if self.min_depth > self.max_depth:
            raise ValueError(f"min_depth ({self.min_depth}) must not exceed max_depth ({self.max_depth})")
        return self

    @property
    def depths(self) -> range:
        """Candidate depths for a sweep, `min_depth` to `max_depth` inclusive."""
        return range(self.min_depth, self.max_depth + 1)
