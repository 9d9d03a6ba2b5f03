"""
Environment lookups.

A lookup is any callable taking a variable name and returning its string
value, or None when the variable is absent. Registries and bindings take a
lookup as a dependency so tests never have to touch os.environ.
"""
import logging
import os
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Optional[str]]


def environ_lookup(name: str) -> Optional[str]:
    """Read a variable from the process environment at call time."""
    return os.environ.get(name)


def mapping_lookup(mapping: Mapping[str, Optional[str]]) -> Lookup:
    """Lookup over a mapping. The mapping is read on every call, so later changes are visible."""
    def lookup(name: str) -> Optional[str]:
        return mapping.get(name)
    return lookup


def _stringify(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def yaml_lookup(config_path) -> Lookup:
    """Lookup over a flat YAML mapping of variable names to scalar values.

    Args:
        config_path: Path to the YAML file

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a flat mapping of scalars
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Environment file not found: {config_file}")

    with open(config_file, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in environment file {config_file}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Environment file {config_file} must contain a mapping")

    values: Dict[str, Optional[str]] = {}
    for name, value in data.items():
        if isinstance(value, (dict, list)):
            raise ValueError(f"Variable '{name}' in {config_file} must be a scalar value")
        values[str(name)] = _stringify(value)

    logger.debug(f"Loaded {len(values)} variables from {config_file}")
    return mapping_lookup(values)


def chain_lookup(*lookups: Lookup) -> Lookup:
    """Ask each lookup in order; the first non-None answer wins."""
    def lookup(name: str) -> Optional[str]:
        for candidate in lookups:
            value = candidate(name)
            if value is not None:
                return value
        return None
    return lookup
