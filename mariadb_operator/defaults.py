"""
Environment driven defaults for MariaDB resources

The defaults are resolved once at process start with setup_defaults() and the
resulting MariaDBDefaults value is handed to every reconcile pass. They are
never re-read per reconcile so that a changed environment cannot produce a
mixed rollout.
"""

# Standard
from dataclasses import dataclass
from typing import Mapping, Optional
import os

# First Party
import alog

# Local
from . import constants
from .api import MariaDBSpec

log = alog.use_channel("DFLTS")


@dataclass(frozen=True)
class MariaDBDefaults:
    """Resolved defaults. Immutable so it can be shared across threads."""

    container_image_url: str = constants.MARIADB_CONTAINER_IMAGE


def get_env_var(
    name: str,
    default: str,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Get an override value from the environment, falling back to the default
    when the variable is unset or empty

    Args:
        name:  str
            The name of the environment variable
        default:  str
            The compiled-in fall-back value
        environ:  Optional[Mapping[str, str]]
            The override source. Defaults to os.environ.

    Returns:
        value:  str
            The override if present and non-empty, else the default
    """
    if environ is None:
        environ = os.environ
    try:
        value = environ.get(name)
    except AttributeError:
        log.warning("Override source for [%s] is not a mapping. Ignoring", name)
        return default
    if isinstance(value, str) and value:
        log.debug("Using override %s=%s", name, value)
        return value
    log.debug2("No override for %s. Using default [%s]", name, default)
    return default


def setup_defaults(environ: Optional[Mapping[str, str]] = None) -> MariaDBDefaults:
    """Resolve the MariaDB defaults from the environment. Call this once at
    startup and reuse the result.
    """
    defaults = MariaDBDefaults(
        container_image_url=get_env_var(
            constants.CONTAINER_IMAGE_ENV_VAR,
            constants.MARIADB_CONTAINER_IMAGE,
            environ,
        ),
    )
    log.info("Resolved MariaDB defaults: %s", defaults)
    return defaults


def apply_defaults(spec: MariaDBSpec, defaults: MariaDBDefaults) -> MariaDBSpec:
    """Fill any unset spec fields from the resolved defaults. A value the user
    set is never replaced.
    """
    if spec.container_image:
        return spec
    log.debug2("Defaulting containerImage to %s", defaults.container_image_url)
    return spec.with_container_image(defaults.container_image_url)
