"""Root conftest — shared test configuration and the synthetic font.

Invariants:
    - Tests never touch the network; every httpx client uses MockTransport
    - Tests never read or write ./.token (SHICI_TOKEN_PATH points at a temp dir)
    - One synthetic font is built per session and loaded through the real loader
"""

import os
import tempfile

import pytest

from shici.core.page_composer import PageComposer
from shici.infrastructure.font_loader import load_font_face
from tests.font_factory import build_test_font

os.environ.setdefault(
    "SHICI_TOKEN_PATH", os.path.join(tempfile.gettempdir(), "shici-test.token"),
)
os.environ.setdefault("SHICI_LOG_FORMAT", "text")


@pytest.fixture(scope="session")
def font_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("fonts") / "shici-test.ttf"
    build_test_font(path)
    return path


@pytest.fixture(scope="session")
def font_face(font_path):
    return load_font_face(font_path)


@pytest.fixture(scope="session")
def composer():
    return PageComposer.from_package()
