"""
Ready-made validators for the usual shapes of environment variables.

Each factory returns a validator: a callable taking the raw value and
returning the validated one, raising ValidationError otherwise. Validators
compose with all_of(), e.g. all_of(required(), url()).
"""
from typing import Any, Iterable, Optional, Sequence
from urllib.parse import urlparse

from ..exceptions import ValidationError
from .base import BaseValidator

_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


class Required(BaseValidator):
    def validate(self, value):
        if value is None:
            raise ValidationError('value is null or undefined')
        return value


class String(BaseValidator):
    def validate(self, value):
        if not isinstance(value, str):
            raise ValidationError('value is not a string')
        return value


class Url(BaseValidator):
    """Accepts absolute URLs whose protocol (scheme plus ':') is allowed."""

    def __init__(self, protocols: Sequence[str] = ('https:',)):
        super().__init__()
        self.protocols = tuple(protocols)

    def validate(self, value):
        value = String().validate(value)
        parsed = urlparse(value)
        if f"{parsed.scheme}:" not in self.protocols:
            raise ValidationError(f"Invalid protocol: {', '.join(self.protocols)}")
        if not parsed.netloc:
            raise ValidationError('Invalid URL')
        return value


class Integer(BaseValidator):
    def __init__(self, minimum: Optional[int] = None, maximum: Optional[int] = None):
        super().__init__()
        self.minimum = minimum
        self.maximum = maximum

    def validate(self, value):
        text = String().validate(value)
        try:
            number = int(text.strip())
        except ValueError:
            raise ValidationError(f"value is not an integer: '{value}'")
        if self.minimum is not None and number < self.minimum:
            raise ValidationError(f"value must be at least {self.minimum}")
        if self.maximum is not None and number > self.maximum:
            raise ValidationError(f"value must be at most {self.maximum}")
        return number


class Boolean(BaseValidator):
    def validate(self, value):
        normalized = String().validate(value).strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ValidationError(f"value is not a boolean: '{value}'")


class OneOf(BaseValidator):
    def __init__(self, choices: Iterable[Any]):
        super().__init__()
        self.choices = tuple(choices)

    def validate(self, value):
        if value not in self.choices:
            allowed = ', '.join(str(choice) for choice in self.choices)
            raise ValidationError(f"value must be one of: {allowed}")
        return value


class OptionalValue(BaseValidator):
    """Returns the default for an absent value, otherwise delegates."""

    def __init__(self, validator, default: Any = None):
        super().__init__()
        self.validator = validator
        self.default = default

    def validate(self, value):
        if value is None:
            return self.default
        return self.validator(value)


class AllOf(BaseValidator):
    """Runs validators in order, feeding each the previous one's output."""

    def __init__(self, validators: Sequence):
        super().__init__()
        self.validators = tuple(validators)

    def validate(self, value):
        for validator in self.validators:
            value = validator(value)
        return value


def required() -> BaseValidator:
    return Required()


def string() -> BaseValidator:
    return String()


def url(protocols: Sequence[str] = ('https:',)) -> BaseValidator:
    return Url(protocols)


def integer(minimum: Optional[int] = None, maximum: Optional[int] = None) -> BaseValidator:
    return Integer(minimum, maximum)


def boolean() -> BaseValidator:
    return Boolean()


def one_of(*choices) -> BaseValidator:
    return OneOf(choices)


def optional(validator, default: Any = None) -> BaseValidator:
    return OptionalValue(validator, default)


def all_of(*validators) -> BaseValidator:
    return AllOf(validators)
