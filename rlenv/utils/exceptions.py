# External imports with version comments
import enum
import logging  # >=3.10 - Logger integration for error reporting at the point of misuse
import time  # >=3.10 - Timestamp generation for error tracking
import uuid
from typing import (  # >=3.10 - Type hints for exception parameters and error details
    Any,
    Dict,
    Optional,
)

# Global constants for error handling configuration
RECOVERY_SUGGESTION_MAX_LENGTH = 500
ERROR_VALUE_MAX_LENGTH = 200

# Module exports - exception hierarchy used across spaces, envs and wrappers
__all__ = [
    "RLEnvError",
    "ValidationError",
    "StateError",
    "ResetNeeded",
    "ConfigurationError",
    "StatisticsKeyCollisionError",
    "IncompatibleSpaceError",
    "NameNotFound",
    "ErrorSeverity",
    "format_error_details",
]


class ErrorSeverity(enum.IntEnum):
    """Enumeration defining error severity levels for exception classification and logging priority.

    Construction and argument errors are MEDIUM, lifecycle and configuration
    errors are HIGH; nothing in rlenv is transient, so nothing is retried.
    """

    LOW = 1  # Minor issues like validation warnings
    MEDIUM = 2  # Malformed arguments rejected at construction
    HIGH = 3  # Lifecycle or wrapper-stacking misconfiguration
    CRITICAL = 4  # Corrupted internal state

    def get_description(self) -> str:
        """Get human-readable description of error severity level.

        Returns:
            str: Description of severity level for logging and user display
        """
        severity_descriptions = {
            ErrorSeverity.LOW: "Minor issue with suggested improvements",
            ErrorSeverity.MEDIUM: "Invalid argument rejected before any state change",
            ErrorSeverity.HIGH: "Misuse of the environment lifecycle or wrapper stack",
            ErrorSeverity.CRITICAL: "Internal state corrupted, environment must be recreated",
        }
        return severity_descriptions.get(self, "Unknown severity level")

    def should_escalate(self) -> bool:
        """Check if error severity requires escalation to higher-level error handling."""
        return self in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL)


def _truncate_value(value: Any) -> Any:
    """Shorten long reprs so huge arrays do not flood error details."""
    if value is None or isinstance(value, (bool, int, float, str)):
        if isinstance(value, str) and len(value) > ERROR_VALUE_MAX_LENGTH:
            return value[: ERROR_VALUE_MAX_LENGTH - 3] + "..."
        return value
    text = repr(value)
    if len(text) > ERROR_VALUE_MAX_LENGTH:
        return text[: ERROR_VALUE_MAX_LENGTH - 3] + "..."
    return text


class RLEnvError(Exception):
    """Base exception class for all rlenv errors providing a consistent error interface, logging integration and recovery suggestions.

    Every failure raised by spaces, environments, wrappers and the registry
    derives from this class so callers can catch the whole family at once.
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        **kwargs: Any,
    ):
        """Initialize base exception with message, severity level and error tracking.

        Args:
            message (str): Primary error description
            severity (ErrorSeverity): Error severity level for classification
            **kwargs: Extra details stored in ``error_details``
        """
        super().__init__(message)

        self.message = message
        self.severity = severity
        self.timestamp = time.time()
        self.error_id = str(uuid.uuid4())
        self.recovery_suggestion: Optional[str] = None
        self.error_details: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if key not in {"message", "severity"}:
                self.error_details[key] = _truncate_value(value)
        self.logged = False

    def get_error_details(self) -> Dict[str, Any]:
        """Get error details including severity, timestamp and recovery information.

        Returns:
            dict: Dictionary containing all error details and metadata
        """
        details = {
            "error_id": self.error_id,
            "message": self.message,
            "timestamp": self.timestamp,
            "severity": self.severity.name,
            "severity_description": self.severity.get_description(),
            "exception_type": self.__class__.__name__,
            "module": self.__class__.__module__,
        }

        if self.recovery_suggestion:
            details["recovery_suggestion"] = self.recovery_suggestion

        details["error_details"] = dict(self.error_details)
        return details

    def log_error(self, logger: Optional[logging.Logger] = None) -> None:
        """Log error with a level derived from its severity.

        Args:
            logger (Optional[logging.Logger]): Logger instance or None for default
        """
        if self.logged:
            return  # Prevent duplicate logging

        if logger is None:
            logger = logging.getLogger("rlenv.exceptions")

        log_message = f"[{self.error_id}] {self.__class__.__name__}: {self.message}"
        if self.recovery_suggestion:
            log_message += f" (suggestion: {self.recovery_suggestion})"

        if self.severity == ErrorSeverity.LOW:
            logger.info(log_message)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning(log_message)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error(log_message)
        else:  # CRITICAL
            logger.critical(log_message)

        self.logged = True

    def set_recovery_suggestion(self, suggestion: str) -> None:
        """Set recovery suggestion for user guidance.

        Args:
            suggestion (str): Recovery suggestion text
        """
        if len(suggestion) > RECOVERY_SUGGESTION_MAX_LENGTH:
            suggestion = suggestion[: RECOVERY_SUGGESTION_MAX_LENGTH - 3] + "..."

        self.recovery_suggestion = suggestion
        self.error_details["has_recovery_guidance"] = True

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context information to error for enhanced debugging.

        Args:
            key (str): Context key
            value (Any): Context value
        """
        if not key or not isinstance(key, str):
            raise ValueError("Context key must be a non-empty string")

        self.error_details[key] = _truncate_value(value)


class ValidationError(RLEnvError, ValueError):
    """Exception class for malformed constructor and call arguments with parameter-specific context.

    Raised by space and environment constructors for malformed bounds, shape
    mismatches, non-positive counts and mismatched bound representations. The
    object under construction is never returned.
    """

    def __init__(
        self,
        message: str,
        parameter_name: Optional[str] = None,
        parameter_value: Optional[Any] = None,
        expected_format: Optional[str] = None,
    ):
        """Initialize validation error with parameter details.

        Args:
            message (str): Primary error description
            parameter_name (Optional[str]): Name of parameter that failed validation
            parameter_value (Optional[Any]): The value that was provided for the parameter
            expected_format (Optional[str]): Expected format or constraint description
        """
        super().__init__(message, severity=ErrorSeverity.MEDIUM)

        self.parameter_name = parameter_name
        self.parameter_value = _truncate_value(parameter_value)
        self.expected_format = expected_format

        if parameter_name:
            self.error_details["parameter_name"] = parameter_name
            self.error_details["parameter_value"] = self.parameter_value
        if expected_format:
            self.error_details["expected_format"] = expected_format
            self.set_recovery_suggestion(
                f"Provide {parameter_name or 'the parameter'} as {expected_format}."
            )
        else:
            self.set_recovery_suggestion(
                "Check input parameters and ensure they meet the expected format and constraints."
            )


class StateError(RLEnvError, RuntimeError):
    """Exception class for invalid environment lifecycle transitions with current and expected state information."""

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        expected_state: Optional[str] = None,
        component_name: Optional[str] = None,
    ):
        """Initialize state error with current state, expected state and component information.

        Args:
            message (str): Primary error description
            current_state (Optional[str]): Current state description
            expected_state (Optional[str]): Expected state description
            component_name (Optional[str]): Component name where state error occurred
        """
        super().__init__(message, severity=ErrorSeverity.HIGH)

        self.current_state = current_state
        self.expected_state = expected_state
        self.component_name = component_name

        self.set_recovery_suggestion(self.suggest_recovery_action())

    def suggest_recovery_action(self) -> str:
        """Suggest a recovery action based on the reported states.

        Returns:
            str: Recovery action suggestion for resolving state error
        """
        if self.current_state:
            current_lower = self.current_state.lower()
            if "unstarted" in current_lower or "uninitialized" in current_lower:
                return "Call reset() before step() or render()"
            if "done" in current_lower or "terminated" in current_lower:
                return "Reset environment to begin new episode"
        return "Verify the environment lifecycle and reset if necessary"


class ResetNeeded(StateError):
    """Raised when step() or render() is called on a wrapper chain that was never reset."""


class ConfigurationError(RLEnvError):
    """Exception class for wrapper stacking and registration misconfiguration with the offending parameter."""

    def __init__(
        self,
        message: str,
        config_parameter: Optional[str] = None,
        parameter_value: Optional[Any] = None,
    ):
        """Initialize configuration error with parameter details.

        Args:
            message (str): Primary error description
            config_parameter (Optional[str]): Configuration parameter that is invalid
            parameter_value (Optional[Any]): Value that was provided for the parameter
        """
        super().__init__(message, severity=ErrorSeverity.HIGH)

        self.config_parameter = config_parameter
        self.parameter_value = _truncate_value(parameter_value)
        if config_parameter:
            self.error_details["config_parameter"] = config_parameter
        self.set_recovery_suggestion(
            "Check configuration parameters against documentation"
        )


class StatisticsKeyCollisionError(ConfigurationError):
    """Raised when RecordEpisodeStatistics would overwrite an info key set by an inner layer."""

    def __init__(self, stats_key: str):
        super().__init__(
            f"Attempted to add episode statistics to info under key {stats_key!r}, "
            "but that key already exists in the inner environment's info",
            config_parameter="stats_key",
            parameter_value=stats_key,
        )
        self.set_recovery_suggestion(
            "Use a distinct stats_key for each RecordEpisodeStatistics layer"
        )


class IncompatibleSpaceError(ConfigurationError):
    """Raised when a transform wrapper is applied to a space kind its algorithm does not support."""


class NameNotFound(ConfigurationError):
    """Raised when make() or spec() is called with an environment id that is not registered."""


def format_error_details(error: BaseException) -> str:
    """Format an exception as a single diagnostic line.

    Args:
        error (BaseException): Exception to describe

    Returns:
        str: ``Type: message`` plus the recovery suggestion for rlenv errors
    """
    if isinstance(error, RLEnvError):
        line = f"{error.__class__.__name__}: {error.message}"
        if error.recovery_suggestion:
            line += f" | Suggestion: {error.recovery_suggestion}"
        return line
    return f"{error.__class__.__name__}: {error}"
