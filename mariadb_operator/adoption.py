"""
Adoption redirect handling

During migration from an unmanaged database the spec can name an external host
that is authoritative instead of the instance this operator would provision.
resolve_adoption only reports that decision. Skipping provisioning is up to
the reconcile driver.
"""

# Standard
from typing import Tuple
import ipaddress
import re

# First Party
import alog

# Local
from . import config, constants
from .api import MariaDBSpec
from .conditions import Conditions, true_condition

log = alog.use_channel("ADOPT")

# RFC 1123 host name: dot separated labels of up to 63 alphanumerics/hyphens
_HOST_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
_MAX_HOST_LEN = 253


def resolve_adoption(spec: MariaDBSpec) -> Tuple[bool, str]:
    """Determine whether an external host is authoritative

    The host is passed through as given, without validation.

    Returns:
        external_mode:  bool
            True if the spec redirects to an external host
        host:  str
            The external host, or "" when not redirected
    """
    host = spec.adoption_redirect.host
    if host:
        log.debug2("Adoption redirect to %s", host)
        return True, host
    return False, ""


def is_valid_host(host: str) -> bool:
    """True if the host is an IPv4/IPv6 literal or an RFC 1123 host name"""
    if not host:
        return False
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    name = host[:-1] if host.endswith(".") else host
    if not name or len(name) > _MAX_HOST_LEN:
        return False
    labels = name.split(".")
    # An all-numeric dotted name is a malformed address, not a host name
    if all(label.isdigit() for label in labels):
        return False
    return all(_HOST_LABEL.match(label) for label in labels)


def check_adoption_config(spec: MariaDBSpec, conditions: Conditions) -> bool:
    """Report a malformed adoption host on the InvalidConfiguration condition

    The host is still used as-is. This only surfaces the problem to the user
    and clears the condition once the spec is fixed.

    Returns:
        valid:  bool
            False if an adoption host is configured and is malformed
    """
    external_mode, host = resolve_adoption(spec)
    if external_mode and config.adoption.validate_host and not is_valid_host(host):
        log.warning("Adoption redirect host [%s] is not a valid name or IP", host)
        conditions.set(
            true_condition(
                constants.INVALID_CONFIGURATION_CONDITION,
                constants.INVALID_ADOPTION_HOST_REASON,
                f"spec.adoptionRedirect.host [{host}] is not a valid host name or IP",
            )
        )
        return False
    conditions.remove(constants.INVALID_CONFIGURATION_CONDITION)
    return True
