"""
Shared module to hold constant values for the library
"""

## Defaults ####################################################################

# Environment variable used to override the fall-back container image
CONTAINER_IMAGE_ENV_VAR = "RELATED_IMAGE_MARIADB_IMAGE_URL_DEFAULT"

# Fall-back container image for MariaDB/Galera
MARIADB_CONTAINER_IMAGE = (
    "quay.io/podified-antelope-centos9/openstack-mariadb:current-podified"
)

## Conditions ##################################################################

# The aggregate condition computed from all required sub-conditions
READY_CONDITION = "Ready"

# Sub-conditions reported by the provisioning collaborators
STORAGE_READY_CONDITION = "StorageReady"
CREDENTIALS_READY_CONDITION = "CredentialsReady"
DB_INIT_READY_CONDITION = "DBInitReady"
DEPLOYMENT_READY_CONDITION = "DeploymentReady"

# Raised when the adoption redirect host is not a valid name or address
INVALID_CONFIGURATION_CONDITION = "InvalidConfiguration"

# NOTE: Order matters! The first sub-condition that is not true determines the
#   reason and message of the Ready condition.
REQUIRED_CONDITIONS = (
    STORAGE_READY_CONDITION,
    CREDENTIALS_READY_CONDITION,
    DB_INIT_READY_CONDITION,
    DEPLOYMENT_READY_CONDITION,
)

# The key in the condition used for the timestamp
TIMESTAMP_KEY = "lastTransitionTime"

# Reason codes
INIT_REASON = "Init"
READY_REASON = "Ready"
PENDING_REASON_PREFIX = "pending: "
INVALID_ADOPTION_HOST_REASON = "InvalidAdoptionHost"

# Messages
READY_MESSAGE = "Setup complete"
INIT_MESSAGE = "Waiting for {} to be reported"
PENDING_MESSAGE = "{} has not been reported"

## RBAC ########################################################################

# Prefix for the serviceaccount, role and rolebinding names
RBAC_NAME_PREFIX = "mariadb-"

## Resource ####################################################################

API_GROUP = "mariadb.openstack.org"
API_VERSION = f"{API_GROUP}/v1beta1"
KIND = "MariaDB"

# Default namespace if none given
DEFAULT_NAMESPACE = "default"

# Delimiter used for nested dict keys
NESTED_DICT_DELIM = "."
