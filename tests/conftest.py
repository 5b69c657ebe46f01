import os

import pytest

# Directory name -> marker applied to every test collected under it
LAYER_MARKERS = {
    "domain": "domain",
    "application": "application",
    "integration": "integration",
}

# Variables that would point tests at real mail transports or endpoints
TRANSPORT_ENV_VARS = (
    "EMAIL_PROVIDER",
    "SEND_EMAIL_ENDPOINT",
    "SMTP_USER",
    "SMTP_PASSWORD",
    "RESEND_API_KEY",
)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config overlay from domain.toml to run tests with",
    )


def pytest_configure(config):
    # Must be set before any domain is initialized
    os.environ["PROTEAN_ENV"] = config.getoption("--env")


def pytest_collection_modifyitems(config, items):
    for item in items:
        layers = set(item.path.parent.parts) & LAYER_MARKERS.keys()
        for layer in layers:
            item.add_marker(getattr(pytest.mark, LAYER_MARKERS[layer]))

        if "integration" in layers and item.get_closest_marker("fast") is None:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def _offline_transports(monkeypatch):
    """Keep every test on the in-memory email adapter."""
    for var in TRANSPORT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
