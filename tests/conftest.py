"""
Shared test config
"""

# Third Party
import pytest

# Local
from mariadb_operator import constants
from mariadb_operator.test_helpers.helpers import FakeClock, configure_logging

configure_logging()


@pytest.fixture(autouse=True)
def no_image_override(monkeypatch):
    """Make sure the tests run as if the image override is not exported in the
    environment, even if it is
    """
    monkeypatch.delenv(constants.CONTAINER_IMAGE_ENV_VAR, raising=False)


@pytest.fixture
def clock():
    return FakeClock()
