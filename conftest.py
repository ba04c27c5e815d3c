"""Configures pytest further: large key sizes are opt-out (slow) or opt-in (extreme)."""
import pytest

SKIP_REASONS = {
    "slow": "Slow test: needs no --skip-slow option",
    "extreme": "Extreme test: needs --run-extreme option",
}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip key sizes of 2048 bits and up")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run 4096 and 8192 bit generation")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: generation at 2048 bits or similar cost")
    config.addinivalue_line("markers", "extreme: generation at 4096 bits and beyond")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason=SKIP_REASONS["slow"])
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason=SKIP_REASONS["extreme"])
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)
