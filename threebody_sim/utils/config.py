"""Configuration management and initial-condition parsing."""

import configparser
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import yaml
from threebody_sim.physics.body import Body

logger = logging.getLogger(__name__)

BODY_KEYS = (
    "mass",
    "position_x", "position_y", "position_z",
    "velocity_x", "velocity_y", "velocity_z",
)
SIMULATION_SECTION = "simulation"


class ConfigError(ValueError):
    """Raised when a configuration cannot produce a runnable simulation."""


@dataclass
class SimulationConfig:
    """Simulation configuration."""
    bodies: List[Body] = field(default_factory=list)
    time_step: float = 86400.0  # 1 day
    num_steps: int = 1000
    output_file: str = "results.csv"


def _parse_float(value: str, key: str, section: str) -> float:
    try:
        return float(value)
    except ValueError:
        logger.warning("[%s] %s: invalid number %r, using 0.0", section, key, value)
        return 0.0


def _build_body(values: Dict[str, float], section: str) -> Body:
    """Create a body from parsed values, rejecting non-positive masses."""
    mass = values.get("mass", 0.0)
    if not mass > 0.0:
        raise ConfigError(f"[{section}] body mass must be positive, got {mass}")
    return Body(
        mass,
        [values.get("position_x", 0.0), values.get("position_y", 0.0), values.get("position_z", 0.0)],
        [values.get("velocity_x", 0.0), values.get("velocity_y", 0.0), values.get("velocity_z", 0.0)],
    )


def _apply_simulation_settings(config: SimulationConfig, settings: Dict[str, Any], source: str):
    if "time_step" in settings:
        config.time_step = _parse_float(str(settings["time_step"]), "time_step", source)
    if "num_steps" in settings:
        try:
            config.num_steps = int(float(settings["num_steps"]))
        except (TypeError, ValueError):
            logger.warning("[%s] num_steps: invalid value %r, keeping %d",
                           source, settings["num_steps"], config.num_steps)
    if "output_file" in settings:
        config.output_file = str(settings["output_file"])


def _strip_inline_comment(value: str) -> str:
    for marker in ('#', ';'):
        pos = value.find(marker)
        if pos >= 0:
            value = value[:pos]
    return value.strip()


def parse_ini_content(content: str) -> SimulationConfig:
    """Parse INI initial conditions.

    Expected format::

        [Body1]
        mass = 4e29
        position_x = 0
        position_y = 1e11
        position_z = -1e11
        velocity_x = -600
        velocity_y = 0
        velocity_z = 2600

    Every section header whose name starts with ``body`` (any case) starts a
    new body, in file order, even when the name repeats. An optional
    ``[simulation]`` section may set ``time_step``, ``num_steps`` and
    ``output_file``. Lines outside those sections, lines without ``=`` and
    unknown keys are ignored.

    Raises:
        ConfigError: If the text yields no valid bodies
    """
    config = SimulationConfig()
    body_sections: List[Tuple[str, Dict[str, float]]] = []
    settings: Dict[str, str] = {}
    section = None
    values = None

    for line_number, line in enumerate(content.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(('#', ';')):
            continue

        if stripped.startswith('[') and stripped.endswith(']'):
            section = stripped[1:-1].strip()
            lowered = section.lower()
            if lowered.startswith("body"):
                values = {}
                body_sections.append((section, values))
            elif lowered == SIMULATION_SECTION:
                values = settings
            else:
                values = None
            continue

        if values is None or '=' not in stripped:
            logger.debug("Ignoring line %d: %r", line_number, stripped)
            continue

        key, _, raw = stripped.partition('=')
        key = key.strip().lower()
        raw = _strip_inline_comment(raw)
        if values is settings:
            settings[key] = raw
        elif key in BODY_KEYS:
            values[key] = _parse_float(raw, key, section)

    _apply_simulation_settings(config, settings, SIMULATION_SECTION)
    for name, body_values in body_sections:
        try:
            config.bodies.append(_build_body(body_values, name))
        except ConfigError as e:
            logger.warning("Skipping body section: %s", e)

    if not config.bodies:
        raise ConfigError("No bodies found in configuration file")
    return config


def parse_ini_file(config_path: str) -> SimulationConfig:
    """Read and parse an INI initial-condition file.

    Raises:
        ConfigError: If the file cannot be read or yields no valid bodies
    """
    try:
        content = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e
    return parse_ini_content(content)


def _config_from_mapping(data: Any, source: str) -> SimulationConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping at top level")

    config = SimulationConfig()
    _apply_simulation_settings(config, data, source)
    for idx, entry in enumerate(data.get("bodies") or []):
        section = f"bodies[{idx}]"
        if not isinstance(entry, dict):
            logger.warning("Skipping body entry %s: expected a mapping", section)
            continue
        values = {"mass": _parse_float(str(entry.get("mass", 0.0)), "mass", section)}
        for prefix in ("position", "velocity"):
            vector = list(entry.get(prefix) or [0.0, 0.0, 0.0])
            if len(vector) != 3:
                logger.warning("[%s] %s must have 3 components, using zeros", section, prefix)
                vector = [0.0, 0.0, 0.0]
            for axis, value in zip("xyz", vector):
                values[f"{prefix}_{axis}"] = _parse_float(str(value), f"{prefix}_{axis}", section)
        try:
            config.bodies.append(_build_body(values, section))
        except ConfigError as e:
            logger.warning("Skipping body entry: %s", e)

    if not config.bodies:
        raise ConfigError(f"No bodies found in {source}")
    return config


def load_config(config_path: str) -> SimulationConfig:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.ini, .json or .yaml)

    Returns:
        SimulationConfig object

    Raises:
        ConfigError: If the file cannot be read or parsed, or has no valid bodies
    """
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()

    if suffix not in ('.json', '.yaml', '.yml'):
        return parse_ini_file(str(config_path))

    try:
        with open(config_path, 'r') as f:
            if suffix == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid configuration file {config_path}: {e}") from e

    return _config_from_mapping(data, str(config_path))


def _config_to_mapping(config: SimulationConfig) -> Dict[str, Any]:
    return {
        "time_step": config.time_step,
        "num_steps": config.num_steps,
        "output_file": config.output_file,
        "bodies": [
            {
                "mass": body.mass,
                "position": body.position.tolist(),
                "velocity": body.velocity.tolist(),
            }
            for body in config.bodies
        ],
    }


def save_config(config: SimulationConfig, output_path: str, body_names: Optional[List[str]] = None):
    """Save configuration to file.

    Args:
        config: SimulationConfig object
        output_path: Output file path (.ini, .json or .yaml)
        body_names: Optional INI section names (default Body1, Body2, ...)
    """
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()

    with open(output_path, 'w') as f:
        if suffix == '.json':
            json.dump(_config_to_mapping(config), f, indent=2)
        elif suffix in ('.yaml', '.yml'):
            yaml.dump(_config_to_mapping(config), f, default_flow_style=False)
        else:
            parser = configparser.ConfigParser(interpolation=None)
            parser[SIMULATION_SECTION] = {
                "time_step": repr(config.time_step),
                "num_steps": str(config.num_steps),
                "output_file": config.output_file,
            }
            names = body_names or [f"Body{idx + 1}" for idx in range(len(config.bodies))]
            for name, body in zip(names, config.bodies):
                section = {"mass": repr(body.mass)}
                for prefix, vector in (("position", body.position), ("velocity", body.velocity)):
                    for axis, value in zip("xyz", vector):
                        section[f"{prefix}_{axis}"] = repr(float(value))
                parser[name] = section
            parser.write(f)
