"""
Loading and validation of the library config, and the alog setup driven by it

The library config is read once at import from config.yaml. Every key can be
overridden with an environment variable of the same name in upper case, so a
bad LOG_LEVEL or ADOPTION_VALIDATE_HOST fails the import with a ConfigError
before any reconcile pass runs.
"""

# Standard
from typing import Optional
import os

# First Party
import aconfig
import alog

# Local
from ..exceptions import assert_config
from ..log_format import MariaDBJsonFormatter
from .validation import get_invalid_params

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")
VALIDATION_PATH = os.path.join(os.path.dirname(__file__), "config_validation.yaml")


def load_library_config(
    config_path: str = CONFIG_PATH,
    validation_path: str = VALIDATION_PATH,
) -> aconfig.Config:
    """Load a library config with env overrides and check it against its
    validation file

    Args:
        config_path:  str
            Path to the yaml file holding the default values
        validation_path:  str
            Path to the parallel yaml file holding the validation rules

    Returns:
        loaded_config:  aconfig.Config
            The validated config

    Raises:
        ConfigError: if any value, including an env override, is invalid
    """
    loaded_config = aconfig.Config.from_yaml(config_path, override_env_vars=True)

    # The rules themselves are not overridable
    validation_config = aconfig.Config.from_yaml(
        validation_path, override_env_vars=False
    )
    invalid_params = get_invalid_params(loaded_config, validation_config)
    assert_config(
        not invalid_params,
        f"Library configuration found invalid values: {invalid_params}",
    )
    return loaded_config


def configure_logging(config_obj: Optional[aconfig.Config] = None):
    """Configure alog from the log_* keys of the library config. json output
    goes through MariaDBJsonFormatter.
    """
    if config_obj is None:
        config_obj = library_config
    alog.configure(
        default_level=config_obj.log_level,
        filters=config_obj.log_filters,
        formatter=MariaDBJsonFormatter() if config_obj.log_json else "pretty",
        thread_id=config_obj.log_thread_id,
    )


library_config = load_library_config()
configure_logging()
