"""
Exceptions raised by validators.
"""

from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .base_validator import BaseValidator


def _quote_keys(keys: Sequence[str]) -> str:
    return "', '".join(str(key) for key in keys)


class ValidatorConfigurationError(Exception):
    """Base class for errors in how a validator was configured.

    Attributes:
        validator_name (str): The class name of the validator.
        keys (List[str]): Every offending option name or error code.
    """

    def __init__(self, message: str, validator_name: str, keys: Sequence[str]):
        super().__init__(message)
        self.validator_name = validator_name
        self.keys: List[str] = list(keys)


class UnsupportedOption(ValidatorConfigurationError, ValueError):
    """Raised when an option is neither declared nor required."""

    def __init__(self, validator_name: str, keys: Sequence[str], message: Optional[str] = None):
        message = message or f"{validator_name} does not support the following options: '{_quote_keys(keys)}'."
        super().__init__(message, validator_name, keys)

    @classmethod
    def for_key(cls, validator_name: str, key: str) -> "UnsupportedOption":
        return cls(validator_name, [key], f"{validator_name} does not support the following option: '{key}'.")


class UnsupportedErrorCode(ValidatorConfigurationError, ValueError):
    """Raised when an error code was never registered."""

    def __init__(self, validator_name: str, keys: Sequence[str], message: Optional[str] = None):
        message = message or f"{validator_name} does not support the following error codes: '{_quote_keys(keys)}'."
        super().__init__(message, validator_name, keys)

    @classmethod
    def for_key(cls, validator_name: str, key: str) -> "UnsupportedErrorCode":
        return cls(validator_name, [key], f"{validator_name} does not support the following error code: '{key}'.")


class MissingRequiredOption(ValidatorConfigurationError, RuntimeError):
    """Raised when a required option has no default and was not given."""

    def __init__(self, validator_name: str, keys: Sequence[str]):
        message = f"{validator_name} requires the following options: '{_quote_keys(keys)}'."
        super().__init__(message, validator_name, keys)


class ValidatorError(Exception):
    """Raised by a validator when a value fails validation.

    The message is rendered from the validator's own template for `code`, so
    callers see whatever text the validator was configured with.

    Attributes:
        validator (BaseValidator): The validator that rejected the value.
        code (str): The error code.
        arguments (Dict[str, Any]): Placeholder values for the template.
    """

    def __init__(self, validator: "BaseValidator", code: str, arguments: Optional[Dict[str, Any]] = None):
        self.validator = validator
        self.code = code
        self.arguments: Dict[str, Any] = dict(arguments or {})
        super().__init__(validator.get_message(code, self.arguments))

    @property
    def message(self) -> str:
        """The rendered error message."""
        return str(self)
