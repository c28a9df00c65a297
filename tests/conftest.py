# -*- coding: utf-8 -*-
"""
Pytest configuration and fixtures for Mobile Asset Export tests
"""

import os
from pathlib import Path

import pytest

from mobile_asset_export.core import log

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"fake-image-data"


TWO_PAGE_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg"
     xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
     xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"
     width="200" height="100" viewBox="0 0 200 100">
  <sodipodi:namedview id="namedview1">
    <inkscape:page id="page1" x="0" y="0" width="100" height="100" inkscape:label="App Icon!"/>
    <inkscape:page id="page2" x="100" y="0" width="100" height="50" inkscape:label="ic-back"/>
  </sodipodi:namedview>
  <rect x="10" y="10" width="80" height="80" fill="#ff0000"/>
  <rect x="110" y="10" width="80" height="30" fill="#0000ff"/>
</svg>
"""

PLAIN_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="48" height="24">
  <rect x="0" y="0" width="48" height="24" fill="#00ff00"/>
</svg>
"""


class FakeRasterizer:
    """Records render calls and returns a fixed PNG payload."""

    def __init__(self, fail_on=None, error=None):
        self.calls = []
        self._fail_on = fail_on
        self._error = error

    def render(self, artboard, scale_factor, options):
        self.calls.append((artboard.name, scale_factor, options))
        if self._fail_on is not None and artboard.name == self._fail_on:
            raise self._error
        return FAKE_PNG


@pytest.fixture(autouse=True)
def quiet_log():
    """Reset verbose mode between tests"""
    log.set_verbose(False)
    yield
    log.set_verbose(False)


@pytest.fixture
def fake_rasterizer():
    return FakeRasterizer()


@pytest.fixture
def two_page_svg(tmp_path) -> Path:
    path = tmp_path / "icons.svg"
    path.write_text(TWO_PAGE_SVG, encoding="utf-8")
    return path


@pytest.fixture
def plain_svg(tmp_path) -> Path:
    path = tmp_path / "logo.svg"
    path.write_text(PLAIN_SVG, encoding="utf-8")
    return path


@pytest.fixture
def out_dir(tmp_path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def qapp():
    """Create QApplication instance for Qt tests."""
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app
