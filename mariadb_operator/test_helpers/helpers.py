"""
Shared helpers for testing code built on mariadb_operator
"""

# Standard
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
import copy
import os

# First Party
import alog

# Local
from mariadb_operator import constants
from mariadb_operator.config import library_config as config_detail_dict


def configure_logging():
    alog.configure(
        os.environ.get("LOG_LEVEL", "off"),
        os.environ.get("LOG_FILTERS", ""),
        formatter="json"
        if os.environ.get("LOG_JSON", "").lower() == "true"
        else "pretty",
        thread_id=os.environ.get("LOG_THREAD_ID", "").lower() == "true",
    )


configure_logging()

TEST_INSTANCE_NAME = "openstack"
TEST_NAMESPACE = "test"
TEST_SECRET = "osp-secret"
TEST_STORAGE_CLASS = "local-storage"
TEST_STORAGE_REQUEST = "500M"

# Fixed start time for deterministic transition timestamps
TEST_START_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Clock that advances one second every time it is read"""

    def __init__(self, start: datetime = TEST_START_TIME):
        self.current = start
        self.calls = 0

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        self.calls += 1
        return now


def setup_cr(
    name=TEST_INSTANCE_NAME,
    namespace=TEST_NAMESPACE,
    spec=None,
    status=None,
    **kwargs,
) -> dict:
    """Build a MariaDB manifest dict with valid required fields"""
    cr_dict = copy.deepcopy(kwargs)
    cr_dict.setdefault("apiVersion", constants.API_VERSION)
    cr_dict.setdefault("kind", constants.KIND)
    cr_dict.setdefault("metadata", {}).setdefault("name", name)
    cr_dict["metadata"].setdefault("namespace", namespace)
    cr_spec = {
        "secret": TEST_SECRET,
        "storageClass": TEST_STORAGE_CLASS,
        "storageRequest": TEST_STORAGE_REQUEST,
        "containerImage": "",
    }
    cr_spec.update(copy.deepcopy(spec or {}))
    cr_dict["spec"] = cr_spec
    if status is not None:
        cr_dict["status"] = copy.deepcopy(status)
    return cr_dict


@contextmanager
def library_config(**config_overrides):
    """This context manager sets library config values temporarily and reverts
    them on completion
    """
    old_vals = {}
    for key, val in config_overrides.items():
        if key in config_detail_dict:
            old_vals[key] = config_detail_dict[key]
        config_detail_dict[key] = val

    try:
        yield
    finally:
        for key in config_overrides:
            if key in old_vals:
                config_detail_dict[key] = old_vals[key]
            else:
                del config_detail_dict[key]
