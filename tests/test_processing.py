import os

import pytest

from photo_bank.processing import ProcessStage


@pytest.fixture
def stage(media_root):
    return ProcessStage(media_root)


@pytest.fixture
def process_dir(media_root):
    return media_root / "_process"


def touch(path, mtime):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"jpeg bytes")
    os.utime(path, (mtime, mtime))
    return path


def test_photos_to_process_oldest_first(stage, process_dir):
    touch(process_dir / "new.jpg", 300)
    touch(process_dir / "old.JPG", 100)
    touch(process_dir / "nested" / "mid.jpg", 200)
    touch(process_dir / "skip.png", 50)

    assert [p.name for p in stage.photos_to_process()] == ["old.JPG", "mid.jpg", "new.jpg"]


def test_partition_by_keywords(stage, process_dir):
    touch(process_dir / "IMG_1234.jpg", 100)
    touch(process_dir / "sunset-beach-3.jpg", 200)
    touch(process_dir / "DSC_0001.jpg", 300)

    without = [p.name for p in stage.photos_without_keywords()]
    with_kw = [p.name for p in stage.photos_with_keywords()]

    assert without == ["IMG_1234.jpg", "DSC_0001.jpg"]
    assert with_kw == ["sunset-beach-3.jpg"]
    assert not set(without) & set(with_kw)


def test_add_keywords_then_promote(stage, process_dir, media_root):
    photo = touch(process_dir / "IMG_1234.jpg", 100)

    renamed = stage.add_keywords(photo, ["Sunset", "new york"])
    assert renamed.name == "sunset-new_york-1.jpg"
    assert stage.photos_without_keywords() == []

    moved = stage.move_processed_to_import()

    assert moved == [media_root / "_import" / "sunset-new_york-1.jpg"]
    assert moved[0].read_bytes() == b"jpeg bytes"
    assert stage.photos_to_process() == []


def test_promote_leaves_unannotated(stage, process_dir, media_root):
    touch(process_dir / "IMG_1234.jpg", 100)
    touch(process_dir / "beach-1.jpg", 200)

    stage.move_processed_to_import()

    assert (process_dir / "IMG_1234.jpg").exists()
    assert (media_root / "_import" / "beach-1.jpg").exists()


def test_promote_does_not_overwrite_import(stage, process_dir, media_root):
    (media_root / "_import" / "beach-1.jpg").write_bytes(b"waiting")
    touch(process_dir / "beach-1.jpg", 100)

    assert stage.move_processed_to_import() == []
    assert (media_root / "_import" / "beach-1.jpg").read_bytes() == b"waiting"
    assert (process_dir / "beach-1.jpg").exists()


def test_dotted_name_is_judged_on_text_before_last_dot(stage, process_dir):
    touch(process_dir / "beach.holiday-1.jpg", 100)
    touch(process_dir / "IMG_0001.jpg", 200)

    assert [p.name for p in stage.photos_with_keywords()] == ["beach.holiday-1.jpg"]
    assert [p.name for p in stage.photos_without_keywords()] == ["IMG_0001.jpg"]
