"""Comparison settings and their YAML loader."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

# Conventional name of the FHIR base data-type bundle
DEFAULT_BUNDLE_NAME = "profiles-types.json"


@dataclass(frozen=True)
class CompareConfig:
    """Settings for a comparison run.

    Example config file:
    ```yaml
    bundle_name: profiles-types.json
    indent: "    "
    not_applicable: "-"
    include_header: true
    ```
    """

    bundle_name: str = DEFAULT_BUNDLE_NAME
    indent: str = "  "  # One unit per shared leading path segment
    not_applicable: str = "N/A"
    include_header: bool = False
    include_field: bool = False


# Settings a config file may set
CONFIGURABLE_PROPERTIES = frozenset(f.name for f in fields(CompareConfig))

# Expected value type of each setting, taken from its default
PROPERTY_TYPES = {f.name: type(f.default) for f in fields(CompareConfig)}


def load_config(path: str | Path | None = None) -> CompareConfig:
    """Load comparison settings, starting from the defaults.

    Args:
        path: Optional YAML file overriding some or all settings.

    Returns:
        The resulting CompareConfig.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the file sets unknown properties, sets a value of the
            wrong type, or isn't a mapping.
    """
    config = CompareConfig()
    if path is None:
        return config

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    invalid_props = set(data.keys()) - CONFIGURABLE_PROPERTIES
    if invalid_props:
        raise ValueError(
            f"Invalid config properties: {sorted(invalid_props)}. "
            f"Only these properties can be set: {sorted(CONFIGURABLE_PROPERTIES)}"
        )

    for name, value in data.items():
        expected = PROPERTY_TYPES[name]
        if not isinstance(value, expected):
            raise ValueError(
                f"Invalid value for config property '{name}': {value!r}. "
                f"Expected {expected.__name__}"
            )

    return replace(config, **data)
