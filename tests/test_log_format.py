"""
Tests for the json log formatter
"""

# Standard
import json
import logging

# Local
from mariadb_operator.log_format import MariaDBJsonFormatter
from mariadb_operator.test_helpers.helpers import setup_cr


def make_record(**extra):
    record = logging.LogRecord(
        name="COND",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    for key, val in extra.items():
        setattr(record, key, val)
    return record


def test_formatter_adds_resource_fields():
    """Make sure the manifest identity is added to each record"""
    formatter = MariaDBJsonFormatter(setup_cr(name="mydb", namespace="ns"))
    out = json.loads(formatter.format(make_record()))
    assert out["kind"] == "MariaDB"
    assert out["resourceName"] == "mydb"
    assert out["resourceNamespace"] == "ns"


def test_formatter_record_resource_wins():
    """Make sure a resource passed on the record overrides the default one"""
    formatter = MariaDBJsonFormatter(setup_cr(name="default"))
    record = make_record(resource=setup_cr(name="other"))
    assert json.loads(formatter.format(record))["resourceName"] == "other"


def test_formatter_without_resource():
    """Make sure records format without any resource"""
    out = json.loads(MariaDBJsonFormatter().format(make_record()))
    assert "resourceName" not in out
