# Ensures project root is importable for tests (so 'data', 'utils', etc. can be imported)
# and provides a Qt core application for signal tests.
import sys
from pathlib import Path

import pytest

def pytest_sessionstart(session):
    ROOT = Path(__file__).resolve().parents[1]
    if str(ROOT) not in sys.path:
        sys.path.insert(0, str(ROOT))

@pytest.fixture(scope="session")
def qt_app():
    from PySide6.QtCore import QCoreApplication
    return QCoreApplication.instance() or QCoreApplication([])
