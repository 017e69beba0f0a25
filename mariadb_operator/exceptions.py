"""
This module implements custom exceptions
"""

## Base Error ##################################################################


class MariaDBOperatorError(Exception):
    """Base class for all mariadb_operator exceptions"""

    def __init__(self, message: str, is_fatal_error: bool):
        """Construct with a flag indicating whether this is a fatal error. This
        will be a static property of all children.
        """
        super().__init__(message)
        self._is_fatal_error = is_fatal_error

    @property
    def is_fatal_error(self):
        """Property indicating whether or not this error should abort the
        reconcile pass rather than be retried
        """
        return self._is_fatal_error


## Fatal Errors ################################################################


class FatalError(MariaDBOperatorError):
    """A FatalError indicates a failure that will not resolve by re-running the
    same reconcile pass against the same input.
    """

    def __init__(self, message: str = ""):
        super().__init__(message=message, is_fatal_error=True)


class ConfigError(FatalError):
    """Exception caused by a malformed resource manifest or library config"""


## Assertions ##################################################################


def assert_config(condition: bool, message: str = ""):
    """Replacement for assert() which will throw a ConfigError. This should be
    used when parsing user-provided manifests or configuration.
    """
    if not condition:
        raise ConfigError(message)
