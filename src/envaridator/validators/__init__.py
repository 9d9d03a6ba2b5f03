"""
Validators package.

Factories for common validators plus the BaseValidator class for writing
new ones. Any single-argument callable works as a validator as well.
"""

from .base import BaseValidator
from .common import all_of, boolean, integer, one_of, optional, required, string, url

__all__ = [
    'BaseValidator',
    'all_of',
    'boolean',
    'integer',
    'one_of',
    'optional',
    'required',
    'string',
    'url',
]
