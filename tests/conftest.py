import copy
import logging

import pytest

from coinparams.constants import AEON

SETTINGS_ENV_VARS = (
    "COIN",
    "COIN_CONFIG_FILE",
    "NETWORK",
    "TESTNET",
    "STAGENET",
    "DEBUG",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def aeon_record():
    """A mutable copy of the bundled AEON record."""
    return copy.deepcopy(dict(AEON))


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate Settings from the developer's environment and .env files."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def restore_package_logger():
    """Undo configure_logging() side effects on the package logger."""
    logger = logging.getLogger("coinparams")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
