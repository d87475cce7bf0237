import pytest

from debate_relay.config import Settings
from fakes import make_settings


@pytest.fixture
def settings() -> Settings:
    """Settings with all three backends configured."""
    return make_settings()
