"""Pytest configuration and shared fixtures."""

import pytest


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--use-real-db",
        action="store_true",
        default=False,
        help="Run integration tests against the configured Postgres database",
    )
    parser.addoption(
        "--online",
        action="store_true",
        default=False,
        help="Run tests that call the real search and enrichment vendors",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with all I/O mocked")
    config.addinivalue_line(
        "markers", "integration: mark test as requiring a Postgres database"
    )
    config.addinivalue_line(
        "markers", "online: mark test as requiring external connectivity"
    )


def pytest_collection_modifyitems(config, items):
    """Skip online and integration tests unless their flag is provided."""
    skip_online = pytest.mark.skip(reason="need --online option to run")
    skip_db = pytest.mark.skip(reason="need --use-real-db option to run")
    for item in items:
        if "online" in item.keywords and not config.getoption("--online"):
            item.add_marker(skip_online)
        if "integration" in item.keywords and not config.getoption("--use-real-db"):
            item.add_marker(skip_db)


@pytest.fixture
def use_real_db(request):
    """Fixture to check if tests should use real database."""
    return request.config.getoption("--use-real-db", default=False)
