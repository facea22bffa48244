"""
Shared fixtures for the sprite editor tests.
Qt is forced onto the offscreen platform so tests run headless.
"""

import logging
import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("QT_LOGGING_RULES", "*.debug=false")

from PyQt6.QtCore import QCoreApplication

from pixelsmith.core.pixelsmith_catalog import JsonSpriteCatalog, UserSession
from pixelsmith.core.pixelsmith_models import Color, GridModel, PaintColorModel

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


@pytest.fixture(scope="session")
def qapp():
    """Create a Qt core application for QObject and QThread based tests"""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv)
    return app


@pytest.fixture(autouse=True)
def reset_pixelsmith_logger():
    """Undo any handlers an editor configured from settings"""
    yield
    logger = logging.getLogger("pixelsmith")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def grid():
    """A small empty 8x8 grid"""
    return GridModel(rows=8, cols=8)


@pytest.fixture
def paint():
    """Paint color source set to red"""
    return PaintColorModel(color=RED)


@pytest.fixture
def catalog(tmp_path):
    """Sprite catalog stored in a temporary directory"""
    return JsonSpriteCatalog(tmp_path / "catalog.json")


@pytest.fixture
def session():
    """Session with user 7 logged in"""
    return UserSession(user_id=7)
