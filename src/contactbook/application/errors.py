"""Typed validation failures raised by the application layer before any storage call."""

from typing import Any


class ContactValidationError(ValueError):
    """Base class: input rejected by a business rule. param_name names the failing field."""

    def __init__(self, param_name: str, message: str) -> None:
        super().__init__(message)
        self.param_name = param_name
        self.message = message


class RequiredFieldError(ContactValidationError):
    """A required value (the contact itself, a name, the email address) is missing or empty."""


class OutOfRangeError(ContactValidationError):
    """A date falls outside its allowed range. actual_value is the offending value."""

    def __init__(self, param_name: str, actual_value: Any, message: str) -> None:
        super().__init__(param_name, message)
        self.actual_value = actual_value

    def __str__(self) -> str:
        return f"{self.message} (Actual value was {self.actual_value})"
