from pathlib import Path

import pytest

from shelfpicker.config import Settings
from tests.helpers import RecordingSleep

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def bgg_settings() -> Settings:
    """Settings pointing at a fake BGG host, independent of the environment."""
    return Settings(
        _env_file=None,
        bgg_base_url="https://bgg.test/xmlapi2",
        bgg_api_token="",
    )


@pytest.fixture
def collection_xml() -> str:
    return load_fixture("bgg_collection.xml")


@pytest.fixture
def thing_xml() -> str:
    return load_fixture("bgg_thing.xml")


@pytest.fixture
def plays_xml() -> str:
    return load_fixture("bgg_plays.xml")


@pytest.fixture
def user_xml() -> str:
    return load_fixture("bgg_user.xml")
