"""
Renames that move photos between stages.

Every move is a single os.rename inside the media root: the photo is never
copied, so on success the source is gone and the destination exists. None of
these functions will overwrite a file that is already at the destination.
"""
import logging
import os
from pathlib import Path

from .paths import ensure_parent
from ..exceptions import MoveFailedError, QuarantineFailedError


def _rename(src: Path, dest: Path):
    if dest.exists():
        raise FileExistsError(f"{dest} already exists")
    ensure_parent(dest)
    os.rename(src, dest)


def move_into_store(src: Path, dest: Path) -> Path:
    """
    Move a photo from import into its category.
    A photo that is already at dest stays where it is.
    """
    if src == dest:
        logging.debug(f"{src} is already in place")
        return dest
    try:
        _rename(src, dest)
    except OSError as e:
        raise MoveFailedError(f"Cannot move {src} -> {dest}: {e}") from e
    return dest


def move_into_failed(src: Path, dest: Path) -> Path:
    try:
        _rename(src, dest)
    except OSError as e:
        raise QuarantineFailedError(f"Cannot quarantine {src} -> {dest}: {e}") from e
    return dest


def move_to_import(src: Path, dest: Path) -> Path:
    try:
        _rename(src, dest)
    except OSError as e:
        raise MoveFailedError(f"Cannot move {src} -> {dest}: {e}") from e
    return dest
