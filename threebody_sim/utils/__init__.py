"""Configuration utilities."""

from threebody_sim.utils.config import (
    ConfigError,
    SimulationConfig,
    load_config,
    parse_ini_content,
    parse_ini_file,
    save_config,
)

__all__ = [
    "ConfigError",
    "SimulationConfig",
    "load_config",
    "parse_ini_content",
    "parse_ini_file",
    "save_config",
]
