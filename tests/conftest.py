"""
Root pytest configuration for envaridator.

Exposes the bundled fixtures to every test module.
"""

from envaridator.logging import bootstrap_logging
from envaridator.pytest_plugin import env_lookup, env_values, envaridator  # noqa: F401

bootstrap_logging()
