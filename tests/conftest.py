import pytest

from embedgen.config import Settings


@pytest.fixture
def settings():
    return Settings(_env_file=None)
