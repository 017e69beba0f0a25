"""
Test the Condition type and the ordered Conditions collection
"""

# Standard
from datetime import datetime, timezone

# First Party
import alog

# Local
from mariadb_operator import constants
from mariadb_operator.conditions import (
    Condition,
    Conditions,
    ConditionStatus,
    false_condition,
    true_condition,
)
from mariadb_operator.test_helpers.helpers import TEST_START_TIME, FakeClock

log = alog.use_channel("TEST")

## ConditionStatus #############################################################


def test_condition_status_parse_strings():
    """Make sure the serialized values parse regardless of case"""
    assert ConditionStatus.parse("True") == ConditionStatus.TRUE
    assert ConditionStatus.parse("false") == ConditionStatus.FALSE
    assert ConditionStatus.parse("Unknown") == ConditionStatus.UNKNOWN


def test_condition_status_parse_bool():
    """Make sure python booleans are accepted"""
    assert ConditionStatus.parse(True) == ConditionStatus.TRUE
    assert ConditionStatus.parse(False) == ConditionStatus.FALSE


def test_condition_status_parse_garbage():
    """Make sure unrecognized values degrade to Unknown rather than raising"""
    assert ConditionStatus.parse("maybe") == ConditionStatus.UNKNOWN
    assert ConditionStatus.parse(None) == ConditionStatus.UNKNOWN


## Condition ###################################################################


def test_condition_to_dict():
    """Make sure the stored representation uses the CRD key names"""
    cond = Condition(
        "StorageReady",
        ConditionStatus.TRUE,
        "Provisioned",
        "PVC bound",
        TEST_START_TIME,
    )
    assert cond.to_dict() == {
        "type": "StorageReady",
        "status": "True",
        "reason": "Provisioned",
        "message": "PVC bound",
        "lastTransitionTime": "2024-01-01T00:00:00+00:00",
    }


def test_condition_to_dict_no_timestamp():
    """Make sure an unstamped condition omits the timestamp key"""
    assert constants.TIMESTAMP_KEY not in true_condition("A", "R").to_dict()


def test_condition_from_dict_round_trip():
    """Make sure a stored condition parses back to the same dict"""
    stored = {
        "type": "DBInitReady",
        "status": "False",
        "reason": "Running",
        "message": "Init job running",
        "lastTransitionTime": "2024-01-01T00:00:05+00:00",
    }
    assert Condition.from_dict(stored).to_dict() == stored


def test_condition_from_dict_zulu_and_naive_timestamps():
    """Make sure Z suffixed and offset-less timestamps are read as UTC"""
    expected = datetime(2024, 1, 1, 0, 0, 5, tzinfo=timezone.utc)
    zulu = Condition.from_dict(
        {"type": "A", "status": "True", "lastTransitionTime": "2024-01-01T00:00:05Z"}
    )
    naive = Condition.from_dict(
        {"type": "A", "status": "True", "lastTransitionTime": "2024-01-01T00:00:05"}
    )
    assert zulu.last_transition_time == expected
    assert naive.last_transition_time == expected


def test_condition_from_dict_bad_timestamp():
    """Make sure a malformed timestamp is dropped instead of raising"""
    cond = Condition.from_dict(
        {"type": "A", "status": "True", "lastTransitionTime": "yesterday"}
    )
    assert cond.last_transition_time is None
    assert cond.is_true


## Conditions.set ##############################################################


def test_set_new_condition_stamps_time(clock):
    """Make sure a newly reported condition gets a transition time"""
    conds = Conditions(clock=clock)
    assert conds.set(true_condition("StorageReady", "Provisioned"))
    assert conds.get("StorageReady").last_transition_time == TEST_START_TIME


def test_set_identical_is_noop(clock):
    """Make sure setting the same condition twice changes nothing"""
    conds = Conditions(clock=clock)
    cond = false_condition("CredentialsReady", "Missing", "secret not found")
    assert conds.set(cond)
    before = conds.to_list()
    assert not conds.set(cond)
    assert conds.to_list() == before
    assert clock.calls == 1


def test_set_same_status_keeps_timestamp(clock):
    """Make sure a new reason/message with an unchanged status updates in place
    without moving the transition time
    """
    conds = Conditions(clock=clock)
    conds.set(false_condition("DBInitReady", "Pending", "waiting"))
    assert conds.set(false_condition("DBInitReady", "Running", "job running"))
    cond = conds.get("DBInitReady")
    assert cond.reason == "Running"
    assert cond.message == "job running"
    assert cond.last_transition_time == TEST_START_TIME


def test_set_status_change_moves_timestamp(clock):
    """Make sure a status flip refreshes the transition time"""
    conds = Conditions(clock=clock)
    conds.set(false_condition("DBInitReady", "Running"))
    conds.set(true_condition("DBInitReady", "Complete"))
    assert conds.get("DBInitReady").last_transition_time > TEST_START_TIME


def test_set_preserves_first_insertion_order(clock):
    """Make sure updating an existing type does not move it"""
    conds = Conditions(clock=clock)
    conds.set(false_condition("A", "r"))
    conds.set(false_condition("B", "r"))
    conds.set(true_condition("A", "r"))
    assert [cond.type for cond in conds] == ["A", "B"]


def test_set_ready_is_ignored(clock):
    """Make sure a collaborator cannot set Ready directly"""
    conds = Conditions(clock=clock)
    assert not conds.set(true_condition(constants.READY_CONDITION, "Forced"))
    assert constants.READY_CONDITION not in conds
    assert not conds.is_true(constants.READY_CONDITION)


def test_mark_true_and_false(clock):
    """Make sure the mark helpers set the expected statuses"""
    conds = Conditions(clock=clock)
    conds.mark_true("StorageReady", "Provisioned", "ok")
    conds.mark_false("CredentialsReady", "Missing", "no secret")
    assert conds.is_true("StorageReady")
    assert conds.get("CredentialsReady").status == ConditionStatus.FALSE


## Conditions.get / is_true / remove ###########################################


def test_is_true_absent_is_false():
    """Make sure a missing condition is reported as not true"""
    assert not Conditions().is_true("StorageReady")
    assert Conditions().get("StorageReady") is None


def test_is_true_unknown_is_false(clock):
    """Make sure an Unknown condition is not true"""
    conds = Conditions(clock=clock)
    conds.init(["StorageReady"])
    assert not conds.is_true("StorageReady")


def test_remove(clock):
    """Make sure remove returns the removed entry and tolerates a missing one"""
    conds = Conditions(clock=clock)
    conds.set(true_condition("A", "r"))
    removed = conds.remove("A")
    assert removed.type == "A"
    assert "A" not in conds
    assert conds.remove("A") is None


## Conditions.init #############################################################


def test_init_seeds_unknown(clock):
    """Make sure init adds every required type as Unknown"""
    conds = Conditions(clock=clock)
    conds.init()
    assert [cond.type for cond in conds] == list(constants.REQUIRED_CONDITIONS)
    for cond in conds:
        assert cond.status == ConditionStatus.UNKNOWN
        assert cond.reason == constants.INIT_REASON


def test_init_keeps_existing(clock):
    """Make sure init does not clobber a reported condition"""
    conds = Conditions(clock=clock)
    conds.set(true_condition(constants.STORAGE_READY_CONDITION, "Provisioned"))
    conds.init()
    assert conds.is_true(constants.STORAGE_READY_CONDITION)
    assert len(conds) == len(constants.REQUIRED_CONDITIONS)


## Serialization ###############################################################


def test_to_list_keeps_stored_order():
    """Make sure a stored Ready that is not first keeps its place"""
    conds = Conditions(
        [
            Condition("StorageReady", ConditionStatus.TRUE, "r", "", TEST_START_TIME),
            Condition(
                constants.READY_CONDITION,
                ConditionStatus.FALSE,
                "r",
                "",
                TEST_START_TIME,
            ),
        ]
    )
    assert [cond["type"] for cond in conds.to_list()] == [
        "StorageReady",
        constants.READY_CONDITION,
    ]


def test_store_new_ready_goes_first(clock):
    """Make sure Ready is put at index 0 for the print columns when it is first
    added to the set
    """
    conds = Conditions(clock=clock)
    conds.set(true_condition("StorageReady", "r"))
    conds.set(false_condition("CredentialsReady", "r"))
    conds._store(false_condition(constants.READY_CONDITION, "r"))
    assert [cond["type"] for cond in conds.to_list()] == [
        constants.READY_CONDITION,
        "StorageReady",
        "CredentialsReady",
    ]


def test_from_list_round_trip_ready_last():
    """Make sure a stored list with Ready after a sub-condition round-trips
    unchanged
    """
    stored = [
        {
            "type": "StorageReady",
            "status": "True",
            "reason": "Provisioned",
            "message": "",
            "lastTransitionTime": "2024-01-01T00:00:00+00:00",
        },
        {
            "type": "Ready",
            "status": "False",
            "reason": "pending: CredentialsReady",
            "message": "CredentialsReady has not been reported",
            "lastTransitionTime": "2024-01-01T00:00:01+00:00",
        },
    ]
    conds = Conditions.from_list(stored, clock=FakeClock())
    conds._store(
        Condition(
            constants.READY_CONDITION,
            ConditionStatus.FALSE,
            "pending: CredentialsReady",
            "CredentialsReady has not been reported",
        )
    )
    assert conds.to_list() == stored


def test_from_list_round_trip():
    """Make sure a stored condition list round-trips unchanged"""
    stored = [
        {
            "type": "Ready",
            "status": "False",
            "reason": "Missing",
            "message": "secret not found",
            "lastTransitionTime": "2024-01-01T00:00:02+00:00",
        },
        {
            "type": "StorageReady",
            "status": "True",
            "reason": "Provisioned",
            "message": "",
            "lastTransitionTime": "2024-01-01T00:00:00+00:00",
        },
        {
            "type": "CredentialsReady",
            "status": "False",
            "reason": "Missing",
            "message": "secret not found",
            "lastTransitionTime": "2024-01-01T00:00:01+00:00",
        },
    ]
    assert Conditions.from_list(stored).to_list() == stored


def test_from_list_skips_malformed():
    """Make sure junk entries are skipped and duplicates keep the last one"""
    conds = Conditions.from_list(
        [
            "not a dict",
            {"status": "True"},
            {"type": "A", "status": "False"},
            {"type": "A", "status": "True"},
        ],
        clock=FakeClock(),
    )
    assert len(conds) == 1
    assert conds.is_true("A")


def test_equality():
    """Make sure two collections with the same entries compare equal"""
    first = Conditions(clock=FakeClock())
    second = Conditions(clock=FakeClock())
    for conds in [first, second]:
        conds.set(true_condition("A", "r"))
    assert first == second
    second.set(false_condition("B", "r"))
    assert first != second
