"""pytest configuration and fixtures for pyqt-regtree tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def qapp():
    """Create QCoreApplication instance for tests."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_view_config():
    """Restore the default view configuration after each test."""
    from pyqt_regtree.protocols import set_view_config

    set_view_config(None)
    yield
    set_view_config(None)
