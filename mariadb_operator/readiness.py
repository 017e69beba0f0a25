"""
The readiness aggregator computes the single Ready condition from the set of
required sub-conditions.

The required types are walked in priority order and the first one that is not
true decides the verdict. Its reason and message are copied onto Ready so the
user sees the earliest blocking stage instead of a downstream symptom. A
required type that has never been reported (absent, or only seeded by
Conditions.init) blocks with the reason "pending: <type>".

compute_readiness never reads a clock. When no stored timestamp can be carried
over it returns Ready without one, and apply_readiness lets the Conditions set
stamp it on insert or on a status flip.
"""

# Standard
from datetime import datetime
from typing import Iterable, Optional

# First Party
import alog

# Local
from . import constants
from .conditions import Condition, Conditions, ConditionStatus

log = alog.use_channel("READY")


def compute_readiness(
    conditions: Conditions,
    required: Iterable[str] = constants.REQUIRED_CONDITIONS,
) -> Condition:
    """Compute the Ready condition for the given set

    The computation does not mutate the set and is repeatable: an unchanged set
    always yields an identical Ready condition, including its timestamp.

    Args:
        conditions:  Conditions
            The current conditions of the resource
        required:  Iterable[str]
            The sub-condition types that must be true, in priority order

    Returns:
        ready:  Condition
            The aggregated Ready condition. last_transition_time is None when
            there is no stored time to carry over.
    """
    required = list(required)
    ready = None
    for type_name in required:
        cond = conditions.get(type_name)
        if cond is None or _is_pending(cond):
            log.debug2("Required condition %s has not been reported", type_name)
            ready = Condition(
                type=constants.READY_CONDITION,
                status=ConditionStatus.FALSE,
                reason=f"{constants.PENDING_REASON_PREFIX}{type_name}",
                message=constants.PENDING_MESSAGE.format(type_name),
                last_transition_time=cond.last_transition_time if cond else None,
            )
            break
        if not cond.is_true:
            log.debug2(
                "Required condition %s is %s: %s",
                type_name,
                cond.status.value,
                cond.reason,
            )
            ready = Condition(
                type=constants.READY_CONDITION,
                status=ConditionStatus.FALSE,
                reason=cond.reason,
                message=cond.message,
                last_transition_time=cond.last_transition_time,
            )
            break

    if ready is None:
        ready = Condition(
            type=constants.READY_CONDITION,
            status=ConditionStatus.TRUE,
            reason=constants.READY_REASON,
            message=constants.READY_MESSAGE,
            last_transition_time=_latest_transition(conditions, required),
        )

    # Hang onto the stored timestamp if the verdict did not flip
    previous = conditions.get(constants.READY_CONDITION)
    if (
        previous is not None
        and previous.status == ready.status
        and previous.last_transition_time is not None
    ):
        ready = Condition(
            type=ready.type,
            status=ready.status,
            reason=ready.reason,
            message=ready.message,
            last_transition_time=previous.last_transition_time,
        )
    return ready


def apply_readiness(
    conditions: Conditions,
    required: Iterable[str] = constants.REQUIRED_CONDITIONS,
) -> Condition:
    """Compute Ready and store it in the set. This is the only supported way to
    put a Ready condition into a Conditions collection.

    Returns:
        ready:  Condition
            The stored Ready condition, always with a transition time
    """
    ready = compute_readiness(conditions, required=required)
    # pylint: disable=protected-access
    if conditions._store(ready):
        log.debug(
            "%s=%s (%s): %s",
            ready.type,
            ready.status.value,
            ready.reason,
            ready.message,
        )
    return conditions.get(constants.READY_CONDITION)


def is_ready(conditions: Conditions) -> bool:
    """True if the aggregated Ready condition is true"""
    return conditions.is_true(constants.READY_CONDITION)


## Implementation Details ######################################################


def _is_pending(cond: Condition) -> bool:
    """An entry seeded by Conditions.init that no collaborator has replaced"""
    return (
        cond.status == ConditionStatus.UNKNOWN
        and cond.reason == constants.INIT_REASON
    )


def _latest_transition(
    conditions: Conditions, required: Iterable[str]
) -> Optional[datetime]:
    """The most recent transition among the required sub-conditions"""
    timestamps = [
        cond.last_transition_time
        for cond in (conditions.get(type_name) for type_name in required)
        if cond is not None and cond.last_transition_time is not None
    ]
    return max(timestamps) if timestamps else None
