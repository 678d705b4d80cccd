import pytest

from band_mean import config


@pytest.fixture(autouse=True)
def restore_config():
    yield
    config.reset()
