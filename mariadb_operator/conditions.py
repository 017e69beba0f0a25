"""
This module holds the Condition type and the ordered Conditions collection that
lives on a MariaDB status.

Each provisioning collaborator (storage, credentials, db init, deployment)
reports its own sub-condition by type name. The collection keeps at most one
entry per type, preserves stored order, and only moves the
lastTransitionTime when the status value actually flips. The Ready condition is
reserved for the readiness aggregator (see readiness.py) and cannot be set
through the public set() call. When the aggregator first adds Ready it is put
at the front so it shows at conditions[0]; after that it keeps its place.

The serialized form is a list of dicts:
[
    {
        "type": "StorageReady",
        "status": "True",
        "reason": "Provisioned",
        "message": "PVC bound",
        "lastTransitionTime": "2024-01-01T00:00:00+00:00",
    },
    ...
]
"""

# Standard
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Union

# Third Party
import dateutil.parser

# First Party
import alog

# Local
from . import constants

log = alog.use_channel("COND")

## Public ######################################################################

# Clock used to stamp transitions. Injectable so tests can pin the time.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock for condition transitions"""
    return datetime.now(timezone.utc)


class ConditionStatus(Enum):
    """The tri-state value of a condition"""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Union["ConditionStatus", str, bool, None]):
        """Parse a status from its serialized (or boolean) representation.
        Anything unrecognized is treated as Unknown.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.TRUE if value else cls.FALSE
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        log.debug2("Unrecognized condition status [%s]. Using Unknown", value)
        return cls.UNKNOWN


@dataclass(frozen=True)
class Condition:
    """A single named status record"""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    last_transition_time: Optional[datetime] = None

    @property
    def is_true(self) -> bool:
        return self.status == ConditionStatus.TRUE

    def to_dict(self) -> dict:
        """Convert to the dict representation stored on the resource"""
        out = {
            "type": self.type,
            "status": self.status.value,
            "reason": self.reason,
            "message": self.message,
        }
        if self.last_transition_time is not None:
            out[constants.TIMESTAMP_KEY] = self.last_transition_time.isoformat()
        return out

    @classmethod
    def from_dict(cls, cond_dict: dict) -> "Condition":
        """Parse a condition from its stored dict representation"""
        timestamp = cond_dict.get(constants.TIMESTAMP_KEY)
        if isinstance(timestamp, str):
            try:
                timestamp = dateutil.parser.parse(timestamp)
            except (dateutil.parser.ParserError, OverflowError):
                log.warning(
                    "Dropping malformed %s [%s] on condition %s",
                    constants.TIMESTAMP_KEY,
                    timestamp,
                    cond_dict.get("type"),
                )
                timestamp = None
        elif not isinstance(timestamp, datetime):
            timestamp = None
        # Stored times without an offset are taken to be UTC
        if timestamp is not None and timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            type=cond_dict.get("type", ""),
            status=ConditionStatus.parse(cond_dict.get("status")),
            reason=cond_dict.get("reason") or "",
            message=cond_dict.get("message") or "",
            last_transition_time=timestamp,
        )


def true_condition(type_name: str, reason: str, message: str = "") -> Condition:
    """Shorthand for a collaborator reporting success"""
    return Condition(type_name, ConditionStatus.TRUE, reason, message)


def false_condition(type_name: str, reason: str, message: str = "") -> Condition:
    """Shorthand for a collaborator reporting a blocking state"""
    return Condition(type_name, ConditionStatus.FALSE, reason, message)


class Conditions:
    """Ordered collection of conditions keyed by type

    This is not thread safe. A reconcile pass owns the collection for its
    duration and the driver never runs two passes for the same resource at
    once.
    """

    def __init__(
        self,
        conditions: Optional[Iterable[Condition]] = None,
        clock: Clock = utc_now,
    ):
        self._clock = clock
        self._conditions = {}
        for cond in conditions or []:
            if cond.type in self._conditions:
                log.warning("Found multiple condition entries for %s", cond.type)
            self._conditions[cond.type] = cond

    ## Query ##

    def get(self, type_name: str) -> Optional[Condition]:
        """Get the condition of the given type, or None if not reported"""
        return self._conditions.get(type_name)

    def is_true(self, type_name: str) -> bool:
        """A missing condition counts as not true"""
        cond = self._conditions.get(type_name)
        return cond is not None and cond.is_true

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._conditions

    def __iter__(self) -> Iterator[Condition]:
        return iter(self._conditions.values())

    def __len__(self) -> int:
        return len(self._conditions)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Conditions):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"Conditions({list(self)})"

    ## Mutation ##

    def set(self, condition: Condition) -> bool:
        """Insert or update the condition with the matching type

        Args:
            condition:  Condition
                The reported condition. Its last_transition_time is only used
                when the status changes (or on the first report) and is
                stamped from the clock when unset.

        Returns:
            changed:  bool
                True if the stored set changed in any way
        """
        if condition.type == constants.READY_CONDITION:
            log.warning(
                "Ignoring direct set of %s. It is computed from sub-conditions",
                constants.READY_CONDITION,
            )
            return False
        return self._store(condition)

    def remove(self, type_name: str) -> Optional[Condition]:
        """Remove and return the condition of the given type if present"""
        removed = self._conditions.pop(type_name, None)
        if removed is not None:
            log.debug2("Removed condition %s", type_name)
        return removed

    def init(self, type_names: Iterable[str] = constants.REQUIRED_CONDITIONS):
        """Seed an Unknown entry for every type that has not been reported yet"""
        for type_name in type_names:
            if type_name not in self._conditions:
                self._store(
                    Condition(
                        type=type_name,
                        status=ConditionStatus.UNKNOWN,
                        reason=constants.INIT_REASON,
                        message=constants.INIT_MESSAGE.format(type_name),
                    )
                )

    def mark_true(self, type_name: str, reason: str, message: str = "") -> bool:
        return self.set(true_condition(type_name, reason, message))

    def mark_false(self, type_name: str, reason: str, message: str = "") -> bool:
        return self.set(false_condition(type_name, reason, message))

    ## Serialization ##

    def to_list(self) -> List[dict]:
        """Serialize to the stored list form in stored order"""
        return [cond.to_dict() for cond in self]

    @classmethod
    def from_list(
        cls,
        cond_list: Optional[List[dict]],
        clock: Clock = utc_now,
    ) -> "Conditions":
        """Parse the stored list form. Non-dict entries are skipped."""
        parsed = []
        for entry in cond_list or []:
            if not isinstance(entry, dict) or not entry.get("type"):
                log.warning("Skipping malformed condition entry: %s", entry)
                continue
            parsed.append(Condition.from_dict(entry))
        return cls(parsed, clock=clock)

    ## Implementation Details ##

    def _store(self, condition: Condition) -> bool:
        """Store without the Ready guard. Used by set() and by the readiness
        aggregator.
        """
        current = self._conditions.get(condition.type)
        if current is None:
            stamped = condition
            if stamped.last_transition_time is None:
                stamped = replace(stamped, last_transition_time=self._clock())
            log.debug("Adding condition %s=%s", condition.type, condition.status.value)
            if condition.type == constants.READY_CONDITION:
                # Newly computed Ready goes to conditions[0] for the print columns
                self._conditions = {condition.type: stamped, **self._conditions}
            else:
                self._conditions[condition.type] = stamped
            return True

        if current.status == condition.status:
            timestamp = current.last_transition_time or self._clock()
        else:
            timestamp = condition.last_transition_time or self._clock()
            log.debug(
                "Condition %s transitioned %s -> %s",
                condition.type,
                current.status.value,
                condition.status.value,
            )
        updated = replace(condition, last_transition_time=timestamp)
        if updated == current:
            log.debug3("No change to condition %s", condition.type)
            return False
        self._conditions[condition.type] = updated
        return True
