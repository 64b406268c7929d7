import csv
import logging
from pathlib import Path
from typing import Iterator, List, Tuple

from . import config
from .organization.keywords import has_keywords, name_to_keywords
from .organization.paths import media_path
from .scanning.filesystem import MediaScanner


class ReportGenerator:
    """
    Snapshot of every photo that is not yet in the store: what stage it is
    in and what would happen to it next.
    """

    headers = ["Path", "Stage", "Status", "Keywords", "Notes"]

    def __init__(self, media_root: Path):
        self.media_root = Path(media_root)
        self.scanner = MediaScanner()

    def rows(self) -> Iterator[Tuple[str, str, str, str, str]]:
        for photo in self.scanner.jpegs_by_mtime(media_path(self.media_root, config.PROCESS_DIR)):
            if has_keywords(photo.stem):
                yield self._row(photo, config.PROCESS_DIR, "annotated", "Ready to move to import")
            else:
                yield self._row(photo, config.PROCESS_DIR, "unannotated", "Needs keywords")

        for photo in self.scanner.jpegs(media_path(self.media_root, config.IMPORT_DIR)):
            yield self._row(photo, config.IMPORT_DIR, "pending", "")

        for photo in self.scanner.jpegs(media_path(self.media_root, config.FAILED_DIR)):
            yield self._row(photo, config.FAILED_DIR, "quarantined", "See log for the import error")

    def _row(self, photo: Path, stage: str, status: str, notes: str):
        kws = name_to_keywords(photo.stem) if has_keywords(photo.stem) else []
        return (str(photo), stage, status, ";".join(kws), notes)

    def summary(self) -> List[Tuple[str, int]]:
        counts: dict[str, int] = {}
        for _, _, status, _, _ in self.rows():
            counts[status] = counts.get(status, 0) + 1
        return sorted(counts.items())

    def generate_status_report(self, output_csv: Path) -> int:
        """Writes the CSV and returns the number of photos in it."""
        logging.info(f"Generating status report for {self.media_root} -> {output_csv}")
        count = 0
        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.headers)
            for row in self.rows():
                writer.writerow(row)
                count += 1
        logging.info(f"Report complete: {count} photos.")
        return count
