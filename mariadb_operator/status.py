"""
This module ties the condition model together for a single reconcile pass

evaluate_status is what a reconcile driver calls once it has gathered the
sub-condition reports from its collaborators. It returns a new status; the
resource passed in is never modified. status_changed lets the driver skip
writing a status that only differs by timestamps.
"""

# Standard
from typing import Iterable, Optional

# Third Party
from deepdiff import DeepDiff

# First Party
import alog

# Local
from . import constants
from .adoption import check_adoption_config, resolve_adoption
from .api import MariaDB, MariaDBStatus
from .conditions import Clock, Condition, Conditions, utc_now
from .defaults import MariaDBDefaults, apply_defaults
from .readiness import apply_readiness

log = alog.use_channel("STTUS")


def evaluate_status(
    resource: MariaDB,
    defaults: MariaDBDefaults,
    reports: Optional[Iterable[Condition]] = None,
    required: Iterable[str] = constants.REQUIRED_CONDITIONS,
    clock: Clock = utc_now,
) -> MariaDBStatus:
    """Merge this pass's sub-condition reports into the resource's status and
    compute the Ready verdict

    Args:
        resource:  MariaDB
            The resource snapshot for this pass
        defaults:  MariaDBDefaults
            The process-wide defaults from setup_defaults()
        reports:  Optional[Iterable[Condition]]
            Sub-conditions reported by the collaborators during this pass
        required:  Iterable[str]
            The required sub-condition types in priority order
        clock:  Clock
            Source of transition timestamps

    Returns:
        status:  MariaDBStatus
            The updated status. dbInitHash is carried through as-is.
    """
    required = list(required)
    spec = apply_defaults(resource.spec, defaults)
    log.debug3(
        "Evaluating %s/%s with image %s",
        resource.namespace,
        resource.name,
        spec.container_image,
    )

    conditions = Conditions(resource.status.conditions, clock=clock)
    conditions.init(required)
    for report in reports or []:
        conditions.set(report)

    check_adoption_config(spec, conditions)
    external_mode, host = resolve_adoption(spec)
    if external_mode:
        log.debug("%s/%s redirected to %s", resource.namespace, resource.name, host)

    ready = apply_readiness(conditions, required=required)
    log.debug(
        "%s/%s %s=%s: %s",
        resource.namespace,
        resource.name,
        ready.type,
        ready.status.value,
        ready.message,
    )
    return MariaDBStatus(
        db_init_hash=resource.status.db_init_hash,
        conditions=conditions,
    )


def status_changed(current_status: dict, new_status: dict) -> bool:
    """Compare two serialized status objects to determine if there is a
    meaningful change. A meaningful change is any change besides a timestamp.

    Args:
        current_status:  dict
            The raw status dict from the current resource
        new_status:  dict
            The proposed new status

    Returns:
        status_changed:  bool
            True if there is a meaningful change between the two
    """
    if not isinstance(current_status, dict) or not isinstance(new_status, dict):
        return True

    return bool(
        DeepDiff(
            current_status,
            new_status,
            exclude_obj_callback=lambda _, path: path.endswith(
                f"['{constants.TIMESTAMP_KEY}']"
            ),
        )
    )
