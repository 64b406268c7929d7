"""
Keywords live in file names.

A photo waiting in _process is given keywords by renaming it to
"<keyword>-<keyword>-<n>.jpg", where multi-word keywords use underscores and n
is the first sequence number that does not clash with a file already there.
"""
import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Set

from ..models import MediaFile

# Two or more letters, anything, then -nnn. A guess, not a parser: it is what
# decides whether a photo in _process is ready to import, so keep it as is.
KEYWORDED_PATTERN = re.compile(r"[a-zA-Z]{2,}.*-\d+")
SEPARATORS = re.compile(r"[ \-,]")


def name_to_keywords(name: str) -> List[str]:
    """
    Keywords from a file name (without extension), separated by -, multi-word
    separated by _. Single letter keywords are ignored.
    """
    tokens = (t.replace('_', ' ') for t in SEPARATORS.split(name.lower()))
    return [t for t in tokens if len(t) > 1]


def keywords_to_name(keywords: Iterable[str]) -> str:
    """Turn a list of keywords into a file name (without extension)."""
    return '-'.join(keywords).replace(' ', '_').lower()


def has_keywords(name: str) -> bool:
    return KEYWORDED_PATTERN.search(name) is not None


def _first_free(keywords_part: str, extension: str, taken: Set[str]) -> str:
    # One more candidate than there are entries is always enough.
    for seq in range(1, len(taken) + 2):
        candidate = f"{keywords_part}-{seq}.{extension}"
        if candidate not in taken:
            return candidate
    raise RuntimeError(f"No free name for {keywords_part}")


def resolve_name(directory: Path, keywords: Iterable[str], extension: str) -> str:
    """
    First "<keywords>-<n>.<extension>" (n from 1) that does not exist in directory.
    """
    taken = set(os.listdir(directory)) if directory.is_dir() else set()
    return _first_free(keywords_to_name(keywords), extension, taken)


def add_keywords(photo: Path, keywords: Iterable[str]) -> Path:
    """
    Add keywords to this photo by renaming it in place, ready for import.
    The sequence number is 1 unless that name is taken, in which case it is
    incremented. A photo that already has the name it would get is left alone.
    """
    media = MediaFile.of(photo)
    taken = set(os.listdir(media.parent)) - {media.name}
    new_name = _first_free(keywords_to_name(keywords), media.extension, taken)
    if new_name == photo.name:
        return photo

    target = photo.parent / new_name
    logging.debug(f"Renaming {photo.name} -> {new_name}")
    photo.rename(target)
    return target
