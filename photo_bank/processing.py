import logging
from pathlib import Path
from typing import Iterable, List, Optional

from . import config
from .exceptions import MoveFailedError
from .organization import keywords
from .organization.mover import move_to_import
from .organization.paths import media_path
from .scanning.filesystem import MediaScanner


class ProcessStage:
    """
    Photos in _process wait for someone to give them keywords. Once renamed
    (see add_keywords) they are moved to _import, where the import loop picks
    them up.
    """

    def __init__(self, media_root: Path, scanner: Optional[MediaScanner] = None):
        self.media_root = Path(media_root)
        self.scanner = scanner or MediaScanner()

    @property
    def process_dir(self) -> Path:
        return media_path(self.media_root, config.PROCESS_DIR)

    @property
    def import_dir(self) -> Path:
        return media_path(self.media_root, config.IMPORT_DIR)

    def photos_to_process(self) -> List[Path]:
        """JPG files in _process, oldest first."""
        return self.scanner.jpegs_by_mtime(self.process_dir)

    def photos_without_keywords(self) -> List[Path]:
        return [p for p in self.photos_to_process() if not keywords.has_keywords(p.stem)]

    def photos_with_keywords(self) -> List[Path]:
        return [p for p in self.photos_to_process() if keywords.has_keywords(p.stem)]

    def add_keywords(self, photo: Path, words: Iterable[str]) -> Path:
        return keywords.add_keywords(Path(photo), words)

    def move_processed_to_import(self) -> List[Path]:
        """
        Moves every keyworded photo into _import, keeping its name.
        A photo whose name is already taken in _import stays where it is.
        """
        moved = []
        for photo in self.photos_with_keywords():
            try:
                moved.append(move_to_import(photo, self.import_dir / photo.name))
            except MoveFailedError as e:
                logging.warning(f"Leaving {photo} in {config.PROCESS_DIR}: {e}")
        if moved:
            logging.info(f"Moved {len(moved)} keyworded photos to {config.IMPORT_DIR}.")
        return moved
