import pytest

from employee_api.api.deps import get_settings
from employee_api.config.loader import BASE_URL_ENV_VAR, CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Keeps the host environment and the cached settings out of each test.
    """
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(BASE_URL_ENV_VAR, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
