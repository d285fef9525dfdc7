import pytest

from geodata.config.settings import get_logging_config, get_settings
from geodata.core.env import get_project_root, load_dotenv_if_present

_CACHED = (get_settings, get_logging_config, get_project_root, load_dotenv_if_present)


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    # Settings are lru-cached; env overrides in one test must not leak into the next.
    for fn in _CACHED:
        fn.cache_clear()
    yield
    for fn in _CACHED:
        fn.cache_clear()
