"""Shared fixtures: a headless QApplication for every test touching Qt objects."""

from __future__ import annotations

import os
from typing import Iterator

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("ARRAYVIZ_ENV", "test")

from PyQt5.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp() -> Iterator[QApplication]:
    """Create (or reuse) the process-wide QApplication."""
    app = QApplication.instance() or QApplication([])
    yield app
