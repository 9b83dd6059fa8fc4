import logging

import pytest

from cidrexpand.config import ExpanderConfig, set_config
from cidrexpand.logging_config import reset_error_stats


@pytest.fixture(autouse=True)
def isolated_state():
    set_config(ExpanderConfig())
    reset_error_stats()
    yield
    logger = logging.getLogger("cidrexpand")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    set_config(None)
