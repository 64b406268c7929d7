"""
Where things live in the media tree.

Everything here is a pure path computation except the two ensure_* helpers,
which only ever create directories.
"""
from pathlib import Path
from typing import Union

from .. import config
from ..exceptions import PathNotUnderRootError
from ..models import CaptureMetadata

PathLike = Union[str, Path]


def media_path(media_root: PathLike, *parts: str) -> Path:
    """A path inside the media directory."""
    return Path(media_root).joinpath(*parts)


def destination_for_capture(media_root: PathLike, metadata: CaptureMetadata, file_name: str) -> Path:
    """
    Year/Month/Day/file_name based on the capture time.
    Segments are not zero padded: March is "3", never "03".
    """
    dt = metadata.captured_at
    return media_path(media_root, str(dt.year), str(dt.month), str(dt.day), file_name)


def thumbnail_mirror(media_root: PathLike, file_path: PathLike) -> Path:
    """The thumbnail location for a file: same relative path, under _thumbs."""
    root = Path(media_root)
    try:
        relative = Path(file_path).relative_to(root)
    except ValueError:
        raise PathNotUnderRootError(f"{file_path} is not under media root {root}")
    return root / config.THUMBS_DIR / relative


def quarantine_path(media_root: PathLike, file_name: str) -> Path:
    return media_path(media_root, config.FAILED_DIR, file_name)


def category_of(media_root: PathLike, file_path: PathLike) -> str:
    """Category of a stored file, e.g. "2017/3/14"."""
    try:
        return Path(file_path).parent.relative_to(Path(media_root)).as_posix()
    except ValueError:
        raise PathNotUnderRootError(f"{file_path} is not under media root {media_root}")


def ensure_parent(path: Path) -> Path:
    """Creates the parent directories of path. Existing ones are fine."""
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def ensure_layout(media_root: PathLike):
    for name in config.SPECIAL_DIRS:
        media_path(media_root, name).mkdir(parents=True, exist_ok=True)
