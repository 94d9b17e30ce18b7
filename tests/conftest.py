import pytest

from better_attributes.logging.filters import clear_query_context, set_logging_context
from better_attributes.settings import reload_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Give every test settings read from a clean environment."""
    for name in (
        "BETTER_ATTRIBUTES_LOG_LEVEL",
        "BETTER_ATTRIBUTES_LOG_JSON",
        "BETTER_ATTRIBUTES_INCLUDE_PRIVATE",
        "BETTER_ATTRIBUTES_MATCH_SUBCLASSES",
        "BETTER_ATTRIBUTES_VALIDATE_MARKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield
    reload_settings()
    clear_query_context()
    set_logging_context(environment=None, extra=None)
