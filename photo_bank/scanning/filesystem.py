import calendar
import os
import re
from pathlib import Path
from typing import Iterator, List, Optional

from .. import config
from ..organization.paths import media_path


def is_jpeg(path: Path) -> bool:
    return path.name.lower().endswith(tuple(config.JPEG_EXTS))


class MediaScanner:
    """
    Finds photos on disk. Results are never cached: every call re-reads the
    directory tree, which is the only record of where each photo is.
    """

    def jpegs(self, root: Path) -> Iterator[Path]:
        """JPG files anywhere below root, in stable name order."""
        for path in self._iter_files(root):
            if is_jpeg(path):
                yield path

    def jpegs_by_mtime(self, root: Path) -> List[Path]:
        """JPG files below root, oldest first (name breaks ties)."""
        return sorted(self.jpegs(root), key=lambda p: (p.stat().st_mtime, p.name))

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir for speed.
        A missing root yields nothing; any other OSError propagates.
        """
        if not root.is_dir():
            return

        stack = [root]
        while stack:
            current = stack.pop()
            with os.scandir(current) as it:
                entries = list(it)

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file(follow_symlinks=False):
                    files.append(Path(e.path))

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

            for f in files:
                yield f


# --- Categories ---
# Categories are the nested year/month/day folders under the media root.

def get_directories(path: Path) -> List[str]:
    return sorted(p.name for p in path.iterdir() if p.is_dir())


def top_level_categories(media_root: Path) -> List[str]:
    """Directory names at the root, skipping the _special ones."""
    return [d for d in get_directories(Path(media_root)) if not d.startswith('_')]


def categories(media_root: Path, category: str) -> List[str]:
    """
    Sorted directory names within this category.
    Assumes that directory names are numeric.
    """
    return sorted(get_directories(media_path(media_root, category)), key=int)


def photos_in_category(media_root: Path, category: str) -> List[Path]:
    folder = media_path(media_root, category)
    return sorted(p for p in folder.iterdir() if p.is_file() and is_jpeg(p))


def all_photos(media_root: Path) -> List[Path]:
    """All photos across all top-level categories."""
    scanner = MediaScanner()
    photos: List[Path] = []
    for category in top_level_categories(media_root):
        photos.extend(scanner.jpegs(media_path(media_root, category)))
    return photos


CATEGORY_PATTERNS = [
    re.compile(r"^(\d{4})/(\d+)/(\d+)$"),
    re.compile(r"^(\d{4})/(\d+)$"),
    re.compile(r"^(\d{4})$"),
]


def category_name(category: str) -> Optional[str]:
    """'2017/3/14' -> '14 March 2017', '2017/3' -> 'March 2017', '2017' -> '2017'."""
    ymd, ym, y = (p.match(category) for p in CATEGORY_PATTERNS)
    if ymd:
        year, month, day = ymd.groups()
        return f"{day} {calendar.month_name[int(month)]} {year}"
    if ym:
        year, month = ym.groups()
        return f"{calendar.month_name[int(month)]} {year}"
    if y:
        return y.group(1)
    return None


def date_parts_to_category(*parts: Optional[int]) -> str:
    return '/'.join(str(p) for p in parts if p is not None)


def next_month_category(year: int, month: int) -> str:
    if month == 12:
        return date_parts_to_category(year + 1, 1)
    return date_parts_to_category(year, month + 1)


def prev_month_category(year: int, month: int) -> str:
    if month == 1:
        return date_parts_to_category(year - 1, 12)
    return date_parts_to_category(year, month - 1)
