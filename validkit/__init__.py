"""validkit: option and message bookkeeping for validators.

This package provides the base class of a validator hierarchy. Validators
declare the options and error messages they support, and the base class
reconciles them with what callers pass in.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .core.base_validator import BaseValidator
from .core.exceptions import (
    MissingRequiredOption,
    UnsupportedErrorCode,
    UnsupportedOption,
    ValidatorConfigurationError,
    ValidatorError,
)
from .core.settings import (
    ValidatorSettings,
    get_default_settings,
    reset_default_settings,
    set_default_settings,
)

__all__ = [
    "__version__",
    "__license__",
    "BaseValidator",
    "MissingRequiredOption",
    "UnsupportedErrorCode",
    "UnsupportedOption",
    "ValidatorConfigurationError",
    "ValidatorError",
    "ValidatorSettings",
    "get_default_settings",
    "reset_default_settings",
    "set_default_settings",
]
