import pytest

from trees_api.config import get_settings
from trees_api.core.logging.builder import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Tests here reconfigure logging; put the suite-wide configuration back afterwards."""
    yield
    setup_logging(get_settings())
