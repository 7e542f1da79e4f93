import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        dest="slow",
        action="store_true",
        help="Run the long tests (up to 10**6 engine steps each)",
        default=False,
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running test, enabled by --slow")


def pytest_collection_modifyitems(config, items):
    if config.option.slow:
        return
    skip_slow = pytest.mark.skip(reason="needs --slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)
