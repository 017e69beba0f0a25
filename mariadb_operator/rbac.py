"""
Names for the access-control objects (serviceaccount, role, rolebinding) owned
by a MariaDB resource
"""

# Local
from . import constants


def rbac_resource_name(name: str) -> str:
    """The name shared by the serviceaccount, role and rolebinding"""
    return constants.RBAC_NAME_PREFIX + name


def rbac_namespace(namespace: str) -> str:
    """The access-control objects live beside the resource"""
    return namespace
