# tests/conftest.py
import pytest

from ringbuf.core import log


@pytest.fixture(scope="session", autouse=True)
def _bootstrap_logging():
    # Setup logging (reads LOG_LEVEL / LOG_JSON / .env if available)
    log.setup()
    yield
