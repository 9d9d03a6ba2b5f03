"""
Post-validation rules run after every variable has been validated.
"""
import logging
from typing import Callable

from .envar import VALIDATION_FAILURES, failure_message
from .exceptions import ValidationError
from .models import Outcome

logger = logging.getLogger(__name__)

PostValidator = Callable[[], None]


class Rule:
    """A described check over the whole configuration, e.g. for migrating a variable."""

    def __init__(self, description: str, check: PostValidator):
        self._description = description
        self._check = check

    @property
    def description(self) -> str:
        return self._description

    @property
    def check(self) -> PostValidator:
        return self._check

    def validate(self) -> None:
        """Run the check. Nothing is memoized; every call runs it again.

        Raises:
            ValidationError: with the check's message, not prefixed
        """
        try:
            self._check()
        except VALIDATION_FAILURES as e:
            if isinstance(e, ValidationError):
                raise
            raise ValidationError(failure_message(e)) from e

    def evaluate(self) -> Outcome:
        try:
            self.validate()
        except ValidationError as e:
            logger.debug(f"Rule '{self._description}' failed: {e.message}")
            return Outcome.failure(e)
        return Outcome.success()

    def __repr__(self) -> str:
        return f"Rule(description={self._description!r})"
