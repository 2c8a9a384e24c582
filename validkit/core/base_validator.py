"""
Base validator class that all validators inherit from.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Optional

from ..utils.inline import dump_inline
from .exceptions import MissingRequiredOption, UnsupportedErrorCode, UnsupportedOption
from .settings import ValidatorSettings, get_default_settings

logger = logging.getLogger(__name__)


def _differs(default: Any, value: Any) -> bool:
    # True and 1 compare equal but are different settings.
    return type(default) is not type(value) or default != value


class BaseValidator(ABC):
    """Abstract base class for all validators.

    A validator owns two registries: options, which control how it behaves,
    and messages, which map error codes to message templates. Subclasses
    declare what they support, either with the `OPTIONS`, `MESSAGES` and
    `REQUIRED_OPTIONS` class attributes or from `configure()`, and callers
    may only pass keys the validator recognizes.

    Every validator supports the `trim` option (default ``False``) and the
    `invalid` error code.

    Attributes:
        OPTIONS (Dict[str, Any]): Options declared by the class, with their
            default values.
        MESSAGES (Dict[str, str]): Error codes declared by the class, with
            their default message templates.
        REQUIRED_OPTIONS (List[str]): Options callers must provide unless a
            default exists.
    """

    OPTIONS: ClassVar[Dict[str, Any]] = {}
    MESSAGES: ClassVar[Dict[str, str]] = {}
    REQUIRED_OPTIONS: ClassVar[List[str]] = []

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        messages: Optional[Mapping[str, str]] = None,
        settings: Optional[ValidatorSettings] = None,
    ) -> None:
        """Initializes the validator and reconciles its configuration.

        The caller's options and messages take precedence over the ones the
        validator declares, but they must use keys the validator knows.

        Args:
            options (Optional[Mapping[str, Any]]): Option values to apply.
            messages (Optional[Mapping[str, str]]): Error message overrides.
            settings (Optional[ValidatorSettings]): Process-wide defaults to
                read from. Defaults to the shared settings object.

        Raises:
            UnsupportedOption: If an option is neither declared nor required.
            UnsupportedErrorCode: If a message uses an unknown error code.
            MissingRequiredOption: If a required option has no value.
        """
        options = dict(options or {})
        messages = dict(messages or {})
        self.settings = settings if settings is not None else get_default_settings()

        self._options: Dict[str, Any] = {"trim": False, **self.OPTIONS}
        self._messages: Dict[str, str] = {
            "invalid": self.settings.get_default_message("invalid"),
            **self.MESSAGES,
        }
        self._required_options: List[str] = list(self.REQUIRED_OPTIONS)

        self.configure(options, messages)

        self.set_default_options(self.get_options())
        self.set_default_messages(self.get_messages())

        name = type(self).__name__
        known_options = set(self._options)

        unknown_options = [key for key in options if key not in known_options and key not in self._required_options]
        if unknown_options:
            logger.debug(f"{name} rejected options: {unknown_options}")
            raise UnsupportedOption(name, unknown_options)

        unknown_codes = [code for code in messages if code not in self._messages]
        if unknown_codes:
            logger.debug(f"{name} rejected error codes: {unknown_codes}")
            raise UnsupportedErrorCode(name, unknown_codes)

        missing = [key for key in self._required_options if key not in known_options and key not in options]
        if missing:
            logger.debug(f"{name} is missing required options: {missing}")
            raise MissingRequiredOption(name, missing)

        self._options.update(options)
        self._messages.update(messages)
        logger.debug(f"Configured {name} with options {self._options}")

    def configure(self, options: Dict[str, Any], messages: Dict[str, str]) -> None:
        """Hook for subclasses to declare options and error messages.

        It runs before the caller's keys are checked, so anything added here
        with `add_option`, `add_message` or `add_required_option` is accepted
        from the caller. Values the caller passes to the constructor take
        precedence over the defaults set here.

        Args:
            options (Dict[str, Any]): The options passed to the constructor.
            messages (Dict[str, str]): The messages passed to the constructor.
        """

    @abstractmethod
    def validate(self, value: Any) -> Any:
        """Validates a value and returns its cleaned form.

        Subclasses implement their rule here and raise `ValidatorError` with
        one of their error codes when the value is not acceptable.
        """
        raise NotImplementedError("Subclasses must implement validate()")

    def clean(self, value: Any) -> Any:
        """Applies common preprocessing and validates the value.

        Surrounding whitespace is stripped from strings when the `trim`
        option is enabled.

        Args:
            value (Any): The raw input.

        Returns:
            Any: Whatever `validate()` returns.
        """
        if self.get_option("trim") and isinstance(value, str):
            value = value.strip()
        return self.validate(value)

    def get_message(self, name: str, values: Optional[Mapping[str, Any]] = None) -> str:
        """Returns an error message given an error code.

        Each ``%key%`` placeholder is replaced with the matching entry of
        `values`, one key at a time in the mapping's order. Replacement text
        is not escaped, so a value containing another ``%key%`` may itself
        be replaced by a later key.

        Args:
            name (str): The error code.
            values (Optional[Mapping[str, Any]]): Placeholder values.

        Returns:
            str: The message, or an empty string if the code does not exist.
        """
        message = self._messages.get(name)
        if message is None:
            message = ""
        for key, value in (values or {}).items():
            message = message.replace(f"%{key}%", str(value))
        return message

    def add_message(self, name: str, value: str) -> "BaseValidator":
        """Adds a new error code with a default error message.

        A process-wide default registered for the same code wins over
        `value`.

        Args:
            name (str): The error code.
            value (str): The error message.

        Returns:
            BaseValidator: The current validator instance.
        """
        if self.settings.has_default_message(name):
            value = self.settings.get_default_message(name)
        self._messages[name] = value
        return self

    def set_message(self, name: str, value: str) -> "BaseValidator":
        """Changes an error message given the error code.

        Args:
            name (str): The error code.
            value (str): The error message.

        Returns:
            BaseValidator: The current validator instance.

        Raises:
            UnsupportedErrorCode: If the error code was never registered.
        """
        if name not in self._messages:
            raise UnsupportedErrorCode.for_key(type(self).__name__, name)
        self._messages[name] = value
        return self

    def get_messages(self) -> Dict[str, str]:
        return dict(self._messages)

    def set_messages(self, values: Mapping[str, str]) -> "BaseValidator":
        """Replaces all error messages without checking the codes."""
        self._messages = dict(values)
        return self

    def get_option(self, name: str) -> Any:
        return self._options.get(name)

    def add_option(self, name: str, value: Any = None) -> "BaseValidator":
        """Adds a new option with a default value.

        Args:
            name (str): The option name.
            value (Any): The default value.

        Returns:
            BaseValidator: The current validator instance.
        """
        self._options[name] = value
        return self

    def set_option(self, name: str, value: Any) -> "BaseValidator":
        """Changes an option value.

        Args:
            name (str): The option name.
            value (Any): The value.

        Returns:
            BaseValidator: The current validator instance.

        Raises:
            UnsupportedOption: If the option is neither declared nor required.
        """
        if name not in self._options and name not in self._required_options:
            raise UnsupportedOption.for_key(type(self).__name__, name)
        self._options[name] = value
        return self

    def has_option(self, name: str) -> bool:
        """Returns True if the option exists and is not None."""
        return self._options.get(name) is not None

    def get_options(self) -> Dict[str, Any]:
        return dict(self._options)

    def set_options(self, values: Mapping[str, Any]) -> "BaseValidator":
        """Replaces all options without checking the names."""
        self._options = dict(values)
        return self

    def add_required_option(self, name: str) -> "BaseValidator":
        """Adds a required option.

        Already constructed validators are not checked again.

        Args:
            name (str): The option name.

        Returns:
            BaseValidator: The current validator instance.
        """
        self._required_options.append(name)
        return self

    def get_required_options(self) -> List[str]:
        return list(self._required_options)

    def get_default_options(self) -> Dict[str, Any]:
        """Returns the options as they were before the caller's overrides."""
        return dict(self._default_options)

    def set_default_options(self, values: Mapping[str, Any]) -> "BaseValidator":
        self._default_options = dict(values)
        return self

    def get_default_messages(self) -> Dict[str, str]:
        """Returns the messages as they were before the caller's overrides."""
        return dict(self._default_messages)

    def set_default_messages(self, values: Mapping[str, str]) -> "BaseValidator":
        self._default_messages = dict(values)
        return self

    def get_error_codes(self) -> List[str]:
        """Returns all error codes this validator can report."""
        return list(self._default_messages)

    def get_options_without_defaults(self) -> Dict[str, Any]:
        """Returns the options whose value differs from the default."""
        return {
            key: value
            for key, value in self._options.items()
            if key not in self._default_options or _differs(self._default_options[key], value)
        }

    def get_messages_without_defaults(self) -> Dict[str, str]:
        """Returns the messages whose text differs from the default."""
        return {
            key: value
            for key, value in self._messages.items()
            if key not in self._default_messages or _differs(self._default_messages[key], value)
        }

    def as_string(self, indent: int = 0) -> str:
        """Returns a compact description of the validator.

        Only options and messages that differ from their defaults are shown,
        e.g. ``Length({max_length: 10}, {invalid: Too long.})``.

        Args:
            indent (int): Number of spaces to prepend.

        Returns:
            str: The string representation of the validator.
        """
        options = self.get_options_without_defaults()
        messages = self.get_messages_without_defaults()

        if options:
            rendered_options = dump_inline(options)
        else:
            rendered_options = "{}" if messages else ""
        rendered_messages = ", " + dump_inline(messages) if messages else ""

        name = type(self).__name__.replace("Validator", "")
        return f"{' ' * indent}{name}({rendered_options}{rendered_messages})"

    def __str__(self) -> str:
        return self.as_string()

    @classmethod
    def set_default_message(cls, name: str, message: str) -> None:
        """Sets the shared default message for an error code.

        Only validators constructed afterwards are affected.
        """
        get_default_settings().set_default_message(name, message)

    @classmethod
    def set_charset(cls, charset: str) -> None:
        """Sets the shared charset to use when validating strings."""
        get_default_settings().set_charset(charset)

    @classmethod
    def get_charset(cls) -> str:
        """Returns the shared charset (default UTF-8)."""
        return get_default_settings().get_charset()
