import os
from pathlib import Path

from photo_bank.scanning.filesystem import (
    MediaScanner,
    all_photos,
    categories,
    category_name,
    is_jpeg,
    next_month_category,
    photos_in_category,
    prev_month_category,
    top_level_categories,
)


def test_is_jpeg():
    assert is_jpeg(Path("a.jpg"))
    assert is_jpeg(Path("A.JPG"))
    assert not is_jpeg(Path("a.jpeg"))
    assert not is_jpeg(Path("a.png"))
    assert not is_jpeg(Path("jpg"))


def test_jpegs_recursive_and_filtered(tmp_path):
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "two.JPG").write_bytes(b"x")
    (tmp_path / "one.jpg").write_bytes(b"x")
    (tmp_path / "notes.txt").write_text("x")

    found = list(MediaScanner().jpegs(tmp_path))
    assert found == [tmp_path / "one.jpg", tmp_path / "b" / "two.JPG"]


def test_jpegs_missing_root(tmp_path):
    assert list(MediaScanner().jpegs(tmp_path / "missing")) == []


def test_jpegs_by_mtime(tmp_path):
    for name, mtime in [("a.jpg", 300), ("b.jpg", 100), ("c.jpg", 200)]:
        p = tmp_path / name
        p.write_bytes(b"x")
        os.utime(p, (mtime, mtime))

    assert [p.name for p in MediaScanner().jpegs_by_mtime(tmp_path)] == ["b.jpg", "c.jpg", "a.jpg"]


def test_categories(media_root):
    for cat in ["2017/3/14", "2017/12/1", "2017/10/2", "2016/1/1"]:
        (media_root / cat).mkdir(parents=True)
    (media_root / "2017" / "3" / "14" / "x.jpg").write_bytes(b"x")
    (media_root / "2017" / "3" / "14" / "y.txt").write_text("x")
    (media_root / "_import" / "z.jpg").write_bytes(b"x")

    assert top_level_categories(media_root) == ["2016", "2017"]
    assert categories(media_root, "2017") == ["3", "10", "12"]
    assert photos_in_category(media_root, "2017/3/14") == [media_root / "2017" / "3" / "14" / "x.jpg"]
    assert all_photos(media_root) == [media_root / "2017" / "3" / "14" / "x.jpg"]


def test_category_name():
    assert category_name("2017/3/14") == "14 March 2017"
    assert category_name("2017/12") == "December 2017"
    assert category_name("2017") == "2017"
    assert category_name("_import") is None


def test_month_navigation():
    assert next_month_category(2017, 12) == "2018/1"
    assert next_month_category(2017, 3) == "2017/4"
    assert prev_month_category(2017, 1) == "2016/12"
    assert prev_month_category(2017, 3) == "2017/2"
