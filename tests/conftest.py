import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    root = logging.getLogger("simple_whitelist")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True
