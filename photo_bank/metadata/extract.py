import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import exifread

from .. import config
from ..exceptions import MetadataUnreadableError
from ..models import CaptureMetadata, Tags


class MetadataReader:
    """
    Reads embedded tags from a photo using 'exifread'.

    exifread names its tags "<IFD> <Tag>" ("EXIF DateTimeOriginal",
    "Image Orientation"). They are regrouped into {"Exif": {...}, "Root": {...}}
    so callers never depend on exifread's naming.
    """

    def read(self, path: Path) -> Optional[Tags]:
        """Returns grouped tags, or None if the file has none we can read."""
        try:
            with path.open('rb') as f:
                # details=False skips maker notes and thumbnails
                raw = exifread.process_file(f, details=False)
        except Exception as e:
            logging.warning(f"EXIF read failed for {path}: {e}")
            return None

        tags = group_tags(raw)
        if not tags:
            logging.debug(f"No EXIF tags found for {path}")
            return None
        return tags


def group_tags(raw: Mapping[str, Any]) -> Tags:
    grouped: Dict[str, Dict[str, str]] = {}
    for key, value in raw.items():
        prefix, _, tag = key.partition(' ')
        group = config.TAG_GROUPS.get(prefix)
        if group and tag:
            grouped.setdefault(group, {})[tag] = str(value).strip()
    return grouped


def parse_capture_metadata(tags: Optional[Tags]) -> CaptureMetadata:
    """
    Capture time and orientation from grouped tags.
    Raises MetadataUnreadableError when the capture time is missing or malformed.
    """
    if not tags:
        raise MetadataUnreadableError("No EXIF tags")

    date_str = tags.get(config.DATE_GROUP, {}).get(config.DATE_TAG)
    if not date_str:
        raise MetadataUnreadableError(f"No {config.DATE_TAG} tag")

    try:
        captured_at = datetime.strptime(date_str, config.EXIF_DATE_FORMAT)
    except ValueError:
        raise MetadataUnreadableError(f"Unparseable {config.DATE_TAG}: {date_str!r}")

    # Orientation is kept for callers but not applied to anything.
    orientation = tags.get(config.ORIENTATION_GROUP, {}).get(config.ORIENTATION_TAG)
    return CaptureMetadata(captured_at=captured_at, orientation=orientation, tags=tags)
