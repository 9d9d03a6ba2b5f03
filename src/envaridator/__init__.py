"""
Envaridator: environment variable registration and validation.

Register variables with a validator and a description, register
post-validation rules, then validate everything in a single pass that
reports every failure at once.
"""

from .envar import Envar
from .exceptions import (
    DuplicateRegistrationError,
    EnvaridatorException,
    ValidationError,
    ValidationReportError,
)
from .lookup import chain_lookup, environ_lookup, mapping_lookup, yaml_lookup
from .models import Outcome, RegistrySettings, ValidationReport
from .registry import Envaridator
from .rule import Rule

__version__ = '0.1.0'

__all__ = [
    'DuplicateRegistrationError',
    'Envar',
    'Envaridator',
    'EnvaridatorException',
    'Outcome',
    'RegistrySettings',
    'Rule',
    'ValidationError',
    'ValidationReport',
    'ValidationReportError',
    'chain_lookup',
    'environ_lookup',
    'mapping_lookup',
    'yaml_lookup',
]
