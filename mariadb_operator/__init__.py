"""
Package exports
"""

# Local
from . import config, constants
from .adoption import check_adoption_config, is_valid_host, resolve_adoption
from .api import AdoptionRedirectSpec, MariaDB, MariaDBSpec, MariaDBStatus
from .conditions import Condition, Conditions, ConditionStatus
from .defaults import MariaDBDefaults, apply_defaults, get_env_var, setup_defaults
from .exceptions import ConfigError, assert_config
from .rbac import rbac_namespace, rbac_resource_name
from .readiness import apply_readiness, compute_readiness, is_ready
from .status import evaluate_status, status_changed
