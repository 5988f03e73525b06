"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrickSettings(BaseSettings):
    """Trick behaviour policies."""

    model_config = SettingsConfigDict(env_prefix="MAGICALC_TRICK_", extra="ignore")

    # Count times more than 30s into a minute as the next minute.
    # Applied to both the magic digits and the final reveal.
    round_to_next_minute: bool = False

    # What to do when the sum overshoots the target:
    #   allow  - log a warning and reveal the digits of the absolute value
    #   refuse - log a warning, stay on the sum and buzz a warning
    negative_magic_policy: Literal["allow", "refuse"] = "allow"

    # Heavy buzz once this many magic digits are revealed (None disables)
    ready_cue_digits: int | None = Field(default=None, ge=1)


class SimulatorSettings(BaseSettings):
    """Desktop simulator window settings."""

    model_config = SettingsConfigDict(env_prefix="MAGICALC_SIMULATOR_", extra="ignore")

    window_width: int = 420
    window_height: int = 760
    fps: int = Field(default=30, ge=1, le=240)
    fullscreen: bool = False
    title: str = "Magic Calculator"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAGICALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "console"] = "simulator"
    debug: bool = False

    # Nested settings
    trick: TrickSettings = Field(default_factory=TrickSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running the pygame simulator."""
        return self.env == "simulator"

    @property
    def is_console(self) -> bool:
        """Check if running the line-oriented console shell."""
        return self.env == "console"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
