import logging

import pytest
from rich.logging import RichHandler


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logging so tests stay independent."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, (RichHandler, logging.FileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
