import logging
import os
import sys

import pytest

# Ensure tests can import the top-level expression modules when pytest changes CWD.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture
def parser_debug_log(caplog):
    """Capture debug records from the lexer and parser loggers."""
    caplog.set_level(logging.DEBUG, logger="parser")
    caplog.set_level(logging.DEBUG, logger="lexer")
    return caplog
