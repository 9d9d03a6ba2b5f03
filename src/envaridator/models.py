"""
Pydantic models for validation outcomes, reports and registry settings.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

import yaml
from pydantic import BaseModel

from .exceptions import EnvaridatorException

logger = logging.getLogger(__name__)

VARIABLES_HEADER = 'The following environment variables are invalid:\n'
RULES_HEADER = 'The following validation rules are invalid:\n'

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off', '')


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a binding or rule: a value or the error it failed with."""
    value: Any = None
    error: Optional[EnvaridatorException] = None

    @classmethod
    def success(cls, value: Any = None) -> 'Outcome':
        return cls(value=value)

    @classmethod
    def failure(cls, error: EnvaridatorException) -> 'Outcome':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the error this outcome carries."""
        if self.error is not None:
            raise self.error.with_traceback(None)
        return self.value


class ValidationReport(BaseModel):
    """Failures collected from one validation pass."""
    failed_variables: List[str] = []
    failed_rules: List[str] = []

    @property
    def ok(self) -> bool:
        return not self.failed_variables and not self.failed_rules

    def render(self) -> str:
        """Render the report text.

        The variables block is the header followed by one line per failure.
        The rules block is always preceded by a blank line, even when no
        variable failed. An empty report renders as an empty string.
        """
        result = ''
        if self.failed_variables:
            result += '\n'.join([VARIABLES_HEADER] + self.failed_variables)
        if self.failed_rules:
            result += '\n\n'
            result += '\n'.join([RULES_HEADER] + self.failed_rules)
        return result


def _parse_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: '{raw}'")


class RegistrySettings(BaseModel):
    """Behavior switches for a registry.

    The defaults reproduce the reference behavior: failed evaluations are
    retried on every access, and rule failures are reported without their
    description.
    """
    cache_failures: bool = False
    prefix_rule_descriptions: bool = False

    @classmethod
    def from_yaml(cls, config_path) -> 'RegistrySettings':
        """Load settings from the ``envaridator`` section of a YAML file."""
        config_file = Path(config_path)
        if not config_file.exists():
            logger.info(f"Settings file not found: {config_file} (using defaults)")
            return cls()

        with open(config_file, 'r') as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in settings file {config_file}: {e}") from e

        if config is None:
            return cls()
        if not isinstance(config, dict):
            raise ValueError(f"Settings file {config_file} must contain a mapping")

        section = config.get('envaridator', {}) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'envaridator' section in {config_file} must be a mapping")
        logger.debug(f"Loaded registry settings from {config_file}: {section}")
        return cls(**section)

    @classmethod
    def from_env(cls, lookup: Optional[Callable[[str], Optional[str]]] = None) -> 'RegistrySettings':
        """Load settings from ENVARIDATOR_* environment variables."""
        if lookup is None:
            lookup = os.environ.get
        values = {}
        cache_failures = lookup('ENVARIDATOR_CACHE_FAILURES')
        if cache_failures is not None:
            values['cache_failures'] = _parse_flag('ENVARIDATOR_CACHE_FAILURES', cache_failures)
        prefix_rules = lookup('ENVARIDATOR_PREFIX_RULES')
        if prefix_rules is not None:
            values['prefix_rule_descriptions'] = _parse_flag('ENVARIDATOR_PREFIX_RULES', prefix_rules)
        return cls(**values)
