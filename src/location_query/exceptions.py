"""Location query custom exception hierarchy.

The query pipeline itself never raises on its inputs. These exceptions cover
the layers around it: option parsing, settings files and location writers.

Exception Hierarchy:
    LocationQueryException (base)
    ├── QueryConfigError
    │   ├── QueryConfigValidationError
    │   └── QueryConfigNotFoundError
    └── LocationError
        └── LocationWriteError
"""

from typing import Optional


class LocationQueryException(Exception):
    """Base exception for all location query errors.

    All package-specific exceptions inherit from this class to allow
    catching them with a single except clause.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize location query exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# Configuration Errors

class QueryConfigError(LocationQueryException):
    """Base exception for configuration errors."""

    pass


class QueryConfigValidationError(QueryConfigError):
    """Raised when an option or settings value is invalid.

    Attributes:
        config_key: Configuration key that failed validation
        config_value: The invalid configuration value
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = str(config_value)[:100]
        super().__init__(message, context)
        self.config_key = config_key
        self.config_value = config_value


class QueryConfigNotFoundError(QueryConfigError):
    """Raised when a settings file does not exist.

    Attributes:
        config_path: The missing file path
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_path:
            context["config_path"] = config_path
        super().__init__(message, context)
        self.config_path = config_path


# Location Errors

class LocationError(LocationQueryException):
    """Base exception for reading or writing the current location."""

    pass


class LocationWriteError(LocationError):
    """Raised when a location writer fails to apply a new address.

    Attributes:
        suffix: The address suffix that could not be written
        writer_error: The underlying exception
    """

    def __init__(
        self,
        message: str,
        suffix: Optional[str] = None,
        writer_error: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if suffix is not None:
            context["suffix"] = suffix[:100]
        if writer_error is not None:
            context["error_type"] = type(writer_error).__name__
        super().__init__(message, context)
        self.suffix = suffix
        self.writer_error = writer_error


__all__ = [
    "LocationQueryException",
    "QueryConfigError",
    "QueryConfigValidationError",
    "QueryConfigNotFoundError",
    "LocationError",
    "LocationWriteError",
]
