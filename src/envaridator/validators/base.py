"""
Base validator class for environment variable validation.

Any callable taking the raw value (a string, or None when the variable is
absent) can be registered as a validator. This class is for validators that
carry configuration and want a readable repr.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseValidator(ABC):
    """Abstract base class for class-based validators."""

    def __init__(self, name: str = None):
        """Initialize the validator.

        Args:
            name: Optional name for the validator (defaults to class name)
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def validate(self, value: Optional[str]) -> Any:
        """Validate a raw value and return the validated value.

        Raises:
            ValidationError: If the value is invalid
        """
        pass

    def __call__(self, value: Optional[str]) -> Any:
        return self.validate(value)

    def __repr__(self) -> str:
        return f"<{self.name}>"
