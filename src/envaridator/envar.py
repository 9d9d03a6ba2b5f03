"""
Variable bindings.

When an environment variable is registered, its name, validator and
description are kept on an Envar. The validated value is computed on first
access and memoized.
"""
import logging
import threading
from typing import Callable, Generic, Optional, TypeVar

from .exceptions import ValidationError
from .lookup import Lookup, environ_lookup
from .models import Outcome

logger = logging.getLogger(__name__)

T = TypeVar('T')

Validator = Callable[[Optional[str]], T]

# Exceptions treated as "the value is invalid". Plain callables such as int
# raise ValueError or TypeError rather than ValidationError.
VALIDATION_FAILURES = (ValidationError, ValueError, TypeError)


def failure_message(error: Exception) -> str:
    """Message text of a validator failure."""
    if isinstance(error, ValidationError):
        return error.message
    return str(error)


class Envar(Generic[T]):
    """A registered environment variable and its lazily validated value."""

    def __init__(self, name: str, validator: Validator, description: str,
                 lookup: Lookup = environ_lookup, cache_failures: bool = False):
        self._name = name
        self._validator = validator
        self._description = description
        self._lookup = lookup
        self._cache_failures = cache_failures
        self._outcome: Optional[Outcome] = None
        self._evaluating = False
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def validator(self) -> Validator:
        return self._validator

    @property
    def is_evaluated(self) -> bool:
        """True once a value (or, with cache_failures, a failure) is memoized."""
        return self._outcome is not None

    def evaluate(self) -> Outcome:
        """Validate the variable without raising.

        The lookup and validator run at most once after a success. A failure
        is memoized only when cache_failures is set; otherwise the next call
        reads the environment and validates again.
        """
        with self._lock:
            if self._outcome is not None:
                return self._outcome

            # A validator reading this binding again, directly or through other bindings
            if self._evaluating:
                return Outcome.failure(ValidationError(
                    f"{self._name} - circular reference while validating", variable_name=self._name))

            raw = self._lookup(self._name)
            self._evaluating = True
            try:
                outcome = Outcome.success(self._validator(raw))
            except VALIDATION_FAILURES as e:
                error = ValidationError(f"{self._name} - {failure_message(e)}", variable_name=self._name)
                error.__cause__ = e
                logger.debug(f"Validation failed for {self._name}: {failure_message(e)}")
                outcome = Outcome.failure(error)
                if not self._cache_failures:
                    return outcome
            finally:
                self._evaluating = False

            self._outcome = outcome
            return outcome

    @property
    def value(self) -> T:
        """The validated value.

        Raises:
            ValidationError: '<name> - <message>' when the validator rejects the value
        """
        return self.evaluate().unwrap()

    def describe(self, markdown: bool = False) -> str:
        if markdown:
            return f"**{self._name}** - {self._description}"
        return f"{self._name} - {self._description}"

    def __repr__(self) -> str:
        return f"Envar(name={self._name!r}, description={self._description!r})"
