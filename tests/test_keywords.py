import pytest
from pathlib import Path

from photo_bank.organization.keywords import (
    add_keywords,
    has_keywords,
    keywords_to_name,
    name_to_keywords,
    resolve_name,
)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("sunset-beach-3", ["sunset", "beach"]),
        ("Sunset Beach,Dog", ["sunset", "beach", "dog"]),
        ("new_york-central_park-12", ["new york", "central park", "12"]),
        ("a-b-cd", ["cd"]),
        ("dog-dog-1", ["dog", "dog"]),
        ("", []),
    ],
)
def test_name_to_keywords(name, expected):
    assert name_to_keywords(name) == expected


def test_name_to_keywords_drops_short_tokens_and_lowercases():
    kws = name_to_keywords("IMG_1234 x Party--Time")
    assert kws == ["img 1234", "party", "time"]
    assert all(len(k) >= 2 and k == k.lower() and "_" not in k for k in kws)


def test_keywords_to_name():
    assert keywords_to_name(["Sunset", "new york", "beach"]) == "sunset-new_york-beach"
    assert keywords_to_name([]) == ""


def test_keywords_round_trip_is_token_level_only():
    original = "sunset beach,dog"
    name = keywords_to_name(name_to_keywords(original))
    assert name == "sunset-beach-dog"
    assert sorted(name_to_keywords(name)) == sorted(name_to_keywords(original))


@pytest.mark.parametrize(
    "name,expected",
    [
        ("sunset-beach-3", True),
        ("beach-1", True),
        ("IMG_1234", False),
        ("DSC-0001", True),     # camera prefix looks keyworded: known false positive
        ("x-1", False),
        ("sunset", False),
        ("12-34", False),
        ("beach.holiday-1", True),  # Path.stem of "beach.holiday-1.jpg"
    ],
)
def test_has_keywords(name, expected):
    assert has_keywords(name) is expected


def test_resolve_name_skips_existing(tmp_path):
    (tmp_path / "beach-1.jpg").write_bytes(b"x")
    assert resolve_name(tmp_path, ["beach"], "jpg") == "beach-2.jpg"


def test_resolve_name_empty_dir(tmp_path):
    assert resolve_name(tmp_path, ["new york", "Park"], "jpg") == "new_york-park-1.jpg"


def test_resolve_name_never_returns_existing(tmp_path):
    for i in range(1, 6):
        (tmp_path / f"beach-{i}.jpg").write_bytes(b"x")
    (tmp_path / "beach-7.jpg").write_bytes(b"x")
    name = resolve_name(tmp_path, ["beach"], "jpg")
    assert name == "beach-6.jpg"
    assert not (tmp_path / name).exists()


def test_add_keywords_renames_in_place(tmp_path):
    photo = tmp_path / "IMG_0001.jpg"
    photo.write_bytes(b"data")
    (tmp_path / "beach-dog-1.jpg").write_bytes(b"other")

    new_path = add_keywords(photo, ["Beach", "dog"])

    assert new_path == tmp_path / "beach-dog-2.jpg"
    assert new_path.read_bytes() == b"data"
    assert not photo.exists()
    assert (tmp_path / "beach-dog-1.jpg").read_bytes() == b"other"


def test_add_keywords_keeps_photo_already_named(tmp_path):
    photo = tmp_path / "beach-1.jpg"
    photo.write_bytes(b"data")
    assert add_keywords(photo, ["beach"]) == photo
    assert photo.exists()
