"""Load the network YAML config and apply command-line overrides."""

from pathlib import Path
from typing import Any

import pydantic_yaml

from eqtl_network.relations.models import EdgeMode

from .schema import NetworkConfig


class ConfigOverrideError(ValueError):
    """An override names an unknown config key or carries an invalid value."""


def load_config(config_path: Path | str) -> NetworkConfig:
    """
    Load and validate network configuration from YAML file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return pydantic_yaml.parse_yaml_raw_as(NetworkConfig, config_path.read_text())


def _coerce_override(key: str, value: Any) -> Any:
    if key != "edge_mode" or isinstance(value, EdgeMode):
        return value
    try:
        return EdgeMode(value)
    except ValueError:
        choices = ", ".join(mode.value for mode in EdgeMode)
        raise ConfigOverrideError(
            f"Invalid edge_mode {value!r}; expected one of: {choices}"
        ) from None


def apply_overrides(config: NetworkConfig, overrides: dict[str, Any]) -> NetworkConfig:
    """
    Return a new config with overrides applied and re-validated.

    Dotted keys address nested sections ("display.node_min_size",
    "catalog.FOXP2.color"). Every segment must already exist in the config;
    None values are skipped so unset CLI options leave the file value.

    Raises:
        ConfigOverrideError: On an unknown key or an invalid edge_mode
        pydantic.ValidationError: If the resulting config is invalid
    """
    data = config.model_dump()

    for key, value in overrides.items():
        if value is None:
            continue
        *parents, leaf = key.split(".")
        section = data
        for part in parents:
            section = section.get(part) if isinstance(section, dict) else None
            if section is None:
                raise ConfigOverrideError(f"Unknown config key: {key}")
        if not isinstance(section, dict) or leaf not in section:
            raise ConfigOverrideError(f"Unknown config key: {key}")
        section[leaf] = _coerce_override(key, value)

    return NetworkConfig.model_validate(data)


def load_config_with_overrides(
    config_path: Path | str,
    overrides: dict[str, Any],
) -> NetworkConfig:
    """Load config from YAML, then apply CLI overrides via apply_overrides()."""
    return apply_overrides(load_config(config_path), overrides)
