import logging
import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("PYTEST_DISABLE_PLUGIN_AUTOLOAD", "1")

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
TESTS = Path(__file__).resolve().parent

for path in (SRC, TESTS):
    path_str = str(path)
    if path_str in sys.path:
        sys.path.remove(path_str)
    sys.path.insert(0, path_str)

from factories import RecordingVerifier, build_command  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_package_logger():
    logger = logging.getLogger("zkemail_ens")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def claim_command():
    return build_command()


@pytest.fixture
def recording_verifier():
    return RecordingVerifier()
