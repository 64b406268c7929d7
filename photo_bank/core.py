import logging
from pathlib import Path
from typing import Callable, List, Optional, Protocol

from tqdm import tqdm

from . import config
from .exceptions import (
    CatalogWriteFailedError,
    MetadataUnreadableError,
    PhotoBankError,
    ResizeFailedError,
)
from .metadata.extract import MetadataReader, parse_capture_metadata
from .models import (
    CaptureMetadata,
    CatalogRecord,
    ImportOutcome,
    ImportState,
    Imported,
    MediaFile,
    Quarantined,
)
from .organization import paths
from .organization.keywords import name_to_keywords
from .organization.mover import move_into_failed, move_into_store
from .organization.thumbnails import ThumbnailGenerator
from .scanning.filesystem import MediaScanner, all_photos


class Catalog(Protocol):
    def upsert(self, rec: CatalogRecord): ...


class ImportPipeline:
    """
    Takes photos from _import into the store.

    For each photo:
    1. Read the capture time from its EXIF tags
    2. Move it to Year/Month/Day/<same name>
    3. Write a thumbnail into the _thumbs mirror
    4. Register it in the catalog

    If any step fails the photo goes to _failed under its original name and
    the run for that photo ends. Photos never affect each other.
    """

    def __init__(self,
                 media_root: Path,
                 catalog: Catalog,
                 reader: Optional[MetadataReader] = None,
                 thumbnailer: Optional[ThumbnailGenerator] = None,
                 scanner: Optional[MediaScanner] = None):
        self.media_root = Path(media_root)
        self.catalog = catalog
        self.reader = reader or MetadataReader()
        self.thumbnailer = thumbnailer or ThumbnailGenerator()
        self.scanner = scanner or MediaScanner()

    def images_to_import(self) -> List[Path]:
        """JPG image files in the _import directory."""
        return list(self.scanner.jpegs(paths.media_path(self.media_root, config.IMPORT_DIR)))

    def import_images(self,
                      should_stop: Optional[Callable[[], bool]] = None,
                      show_progress: bool = False) -> List[ImportOutcome]:
        """
        Imports everything waiting in _import.
        should_stop is checked between photos, never halfway through one.
        """
        images = self.images_to_import()
        if not images:
            logging.debug("Nothing to import.")
            return []

        outcomes: List[ImportOutcome] = []
        for image in tqdm(images, desc="Importing", disable=not show_progress):
            if should_stop and should_stop():
                logging.info("Import stopped before finishing the batch.")
                break
            outcomes.append(self.import_image(image))

        imported = sum(isinstance(o, Imported) for o in outcomes)
        logging.info(f"Import batch: {imported} imported, {len(outcomes) - imported} quarantined.")
        return outcomes

    def import_image(self, image: Path) -> ImportOutcome:
        state = ImportState.PENDING
        current = image
        thumbnail: Optional[Path] = None

        try:
            metadata = self.read_metadata(image)
            state = ImportState.METADATA_EXTRACTED

            destination = paths.destination_for_capture(self.media_root, metadata, image.name)
            current = move_into_store(image, destination)
            state = ImportState.MOVED

            thumbnail = self.make_thumbnail(current)
            state = ImportState.THUMBNAIL_CREATED

            record = self.make_record(current)
            self.register(record)
            state = ImportState.REGISTERED
        except PhotoBankError as e:
            logging.warning(f"Cannot import {image} ({state.value}): {e}")
            if thumbnail is not None:
                thumbnail.unlink(missing_ok=True)
            failed = move_into_failed(current, paths.quarantine_path(self.media_root, image.name))
            return Quarantined(source=image, path=failed, kind=e.kind, error=e, state=state)

        logging.debug(f"Imported {image} -> {current}")
        return Imported(source=image, record=record)

    # --- Steps ---

    def read_metadata(self, image: Path) -> CaptureMetadata:
        try:
            tags = self.reader.read(image)
        except Exception as e:
            raise MetadataUnreadableError(f"Cannot read tags from {image}: {e}") from e
        metadata = parse_capture_metadata(tags)
        if metadata.orientation:
            logging.debug(f"{image} orientation {metadata.orientation} (not applied)")
        return metadata

    def make_thumbnail(self, stored: Path) -> Path:
        """Make a small version for browsing. Call after the photo is in the store."""
        destination = paths.thumbnail_mirror(self.media_root, stored)
        try:
            paths.ensure_parent(destination)
        except OSError as e:
            raise ResizeFailedError(f"Cannot create thumbnail directory for {stored}: {e}") from e
        try:
            thumbnail = self.thumbnailer.resize(stored, config.THUMBNAIL_SIZE, config.THUMBNAIL_SIZE)
            self.thumbnailer.write_as_file(thumbnail, destination)
        except Exception as e:
            destination.unlink(missing_ok=True)
            raise ResizeFailedError(f"Cannot make thumbnail for {stored}: {e}") from e
        return destination

    def make_record(self, stored: Path) -> CatalogRecord:
        photo = MediaFile.of(stored)
        return CatalogRecord(
            path=str(photo.path),
            filename=photo.name,
            name=photo.stem,
            category=paths.category_of(self.media_root, photo.path),
            keywords=name_to_keywords(photo.stem),
        )

    def register(self, record: CatalogRecord):
        try:
            self.catalog.upsert(record)
        except CatalogWriteFailedError:
            raise
        except Exception as e:
            raise CatalogWriteFailedError(f"Cannot write {record.path} to catalog: {e}") from e

    # --- Maintenance ---

    def regen_thumbnails(self, path: Optional[Path] = None, show_progress: bool = False) -> List[Path]:
        """
        Rebuilds thumbnails for every stored photo, or only those below path.
        Photos that fail are logged and skipped.
        """
        if path is None:
            photos = all_photos(self.media_root)
        else:
            thumbs_root = paths.media_path(self.media_root, config.THUMBS_DIR)
            photos = [p for p in self.scanner.jpegs(Path(path))
                      if thumbs_root not in p.parents]

        written = []
        for photo in tqdm(photos, desc="Thumbnails", disable=not show_progress):
            try:
                written.append(self.make_thumbnail(photo))
            except PhotoBankError as e:
                logging.warning(f"Thumbnail failed for {photo}: {e}")
        return written

    def rebuild_catalog(self, show_progress: bool = False) -> int:
        """Registers every photo already in the store. Returns how many were written."""
        count = 0
        for photo in tqdm(all_photos(self.media_root), desc="Cataloging", disable=not show_progress):
            try:
                self.register(self.make_record(photo))
                count += 1
            except PhotoBankError as e:
                logging.warning(f"Cannot catalog {photo}: {e}")
        logging.info(f"Catalog rebuilt with {count} photos.")
        return count
