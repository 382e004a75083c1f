# notion_streak/tests/conftest.py
import pytest

from notion_streak.core.config import Settings
from notion_streak.tests.mocks import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        ENV="test",
        NOTION_TOKEN="secret_test",
        NOTION_DATABASE_ID="db123",
    )


@pytest.fixture
def unconfigured_settings():
    return Settings(_env_file=None, ENV="test", NOTION_TOKEN=None, NOTION_DATABASE_ID=None)
