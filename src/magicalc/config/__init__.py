"""Configuration for the magic calculator."""

from .settings import Settings, TrickSettings, SimulatorSettings, get_settings

__all__ = ["Settings", "TrickSettings", "SimulatorSettings", "get_settings"]
