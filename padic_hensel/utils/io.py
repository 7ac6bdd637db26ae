"""I/O utilities for saving and loading session configuration."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.context import PrecisionConfig, PrecisionContext

logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')


def save_config(config: Any, filepath: str):
    """Save configuration to YAML or JSON (chosen by file suffix).

    Args:
        config: Configuration object (NamedTuple)
        filepath: Path to save file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    if hasattr(config, '_asdict'):
        config_dict = dict(config._asdict())
    else:
        config_dict = dict(config)

    with open(filepath, 'w') as f:
        if filepath.suffix in YAML_SUFFIXES:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(config_dict, f, indent=2)

    logger.info("Config saved to %s", filepath)


def load_config(filepath: str, config_class: type = PrecisionConfig) -> Any:
    """Load configuration from YAML or JSON.

    Keys missing from the file take the class defaults; unknown keys are
    rejected.

    Args:
        filepath: Path to config file
        config_class: Class to instantiate

    Returns:
        Configuration object
    """
    filepath = Path(filepath)
    with open(filepath, 'r') as f:
        if filepath.suffix in YAML_SUFFIXES:
            config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = json.load(f)

    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file {filepath} does not contain a mapping")
    unknown = set(config_dict) - set(config_class._fields)
    if unknown:
        raise ValueError(f"Unknown config keys in {filepath}: {sorted(unknown)}")

    return config_class(**config_dict)


def load_context(filepath: str) -> PrecisionContext:
    """Build a PrecisionContext from a saved PrecisionConfig."""
    return PrecisionContext.from_config(load_config(filepath, PrecisionConfig))


def save_context(context: PrecisionContext, filepath: str,
                 config: Optional[PrecisionConfig] = None):
    save_config(config or context.to_config(), filepath)
