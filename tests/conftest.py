import os
import pytest
from rasterreclass.config import get_settings

@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch):
    # evita fuga de estado entre tests (cache y variables RECLASS_* del host)
    for k in list(os.environ):
        if k.startswith("RECLASS_"):
            monkeypatch.delenv(k)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

def pytest_collection_modifyitems(items):
    for item in items:
        if "integration" in item.keywords and os.environ.get("CI") == "true":
            # marca como slow en CI si quieres escalonar
            item.add_marker(pytest.mark.slow)

@pytest.fixture(autouse=True)
def _reset_package_logger():
    # setup_logging (CLI) agrega handlers atados al stderr capturado del test
    import logging
    lg = logging.getLogger("rasterreclass")
    handlers, level = list(lg.handlers), lg.level
    yield
    for h in list(lg.handlers):
        if h not in handlers:
            lg.removeHandler(h)
            h.close()
    lg.setLevel(level)
