import sqlite3
from pathlib import Path

import pytest
from PIL import Image

from photo_bank import config
from photo_bank.core import ImportPipeline
from photo_bank.database.ops import PhotoCatalog
from photo_bank.database.schema import init_schema
from photo_bank.organization.paths import ensure_layout


class FakeReader:
    """Hands out tags by file name instead of reading EXIF."""

    def __init__(self, dates=None):
        self.dates = dates or {}

    def read(self, path):
        date = self.dates.get(Path(path).name)
        if date is None:
            return None
        return {"Exif": {"DateTimeOriginal": date}, "Root": {"Orientation": "Horizontal (normal)"}}


def write_jpeg(path: Path, size=(640, 480), color="red") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, "JPEG")
    return path


@pytest.fixture
def conn():
    """Returns an in-memory SQLite connection with the schema initialized."""
    c = sqlite3.connect(":memory:")
    init_schema(c)
    try:
        yield c
    finally:
        c.close()


@pytest.fixture
def catalog(conn):
    return PhotoCatalog(conn)


@pytest.fixture
def media_root(tmp_path):
    root = tmp_path / "media"
    ensure_layout(root)
    return root


@pytest.fixture
def import_dir(media_root):
    return media_root / config.IMPORT_DIR


@pytest.fixture
def reader():
    return FakeReader()


@pytest.fixture
def pipeline(media_root, catalog, reader):
    return ImportPipeline(media_root, catalog, reader=reader)


@pytest.fixture
def make_jpeg():
    return write_jpeg
