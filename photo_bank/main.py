import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import ImportPipeline
from .database.db import CatalogDB
from .database.ops import PhotoCatalog
from .models import Imported
from .organization.paths import ensure_layout
from .processing import ProcessStage
from .reporting import ReportGenerator
from .watch import WatchLoop

def setup_logging(media_root: Path, verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to both console and a file (in the media root by default)."""
    log_level = logging.DEBUG if verbose else logging.INFO

    media_root.mkdir(parents=True, exist_ok=True)
    log_file = log_file or media_root / config.LOG_FILE_NAME

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("PIL").setLevel(logging.WARNING)

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Photo Bank: import, keyword and archive photos")

    p.add_argument("--media-root", type=Path, default=os.environ.get(config.MEDIA_PATH_ENV),
                   help=f"Media directory (default: ${config.MEDIA_PATH_ENV})")
    p.add_argument("--db", type=Path, default=None,
                   help=f"Custom path for the SQLite catalog (default: media-root/{config.DEFAULT_DB_NAME})")
    p.add_argument("--log-file", type=Path, default=None, help="Log file (default: media-root/photo_bank.log)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("import", help="Import everything waiting in _import")

    w = sub.add_parser("watch", help="Import forever, pausing between batches")
    w.add_argument("--minutes", type=float, default=config.DEFAULT_POLL_MINUTES, help="Pause between batches")
    w.add_argument("--process", action="store_true", help="Also move keyworded photos from _process each round")

    pr = sub.add_parser("process", help="Photos waiting for keywords")
    pr.add_argument("action", choices=["list", "promote"])

    k = sub.add_parser("keywords", help="Give a photo in _process keywords by renaming it")
    k.add_argument("photo", type=Path)
    k.add_argument("keywords", nargs="+")

    t = sub.add_parser("thumbs", help="Regenerate thumbnails")
    t.add_argument("path", type=Path, nargs="?", default=None, help="Only photos below this path")

    sub.add_parser("reindex", help="Rebuild the catalog from the photos in the store")

    r = sub.add_parser("report", help="CSV of every photo not yet in the store")
    r.add_argument("--csv", type=Path, default=Path("status_report.csv"))

    args = p.parse_args(argv)
    if args.media_root is None:
        p.error(f"--media-root is required (or set ${config.MEDIA_PATH_ENV})")
    return args

def run_command(args, media_root: Path, db_path: Path) -> int:
    stage = ProcessStage(media_root)

    if args.command == "process":
        if args.action == "list":
            for photo in stage.photos_without_keywords():
                print(photo)
        else:
            stage.move_processed_to_import()
        return 0

    if args.command == "keywords":
        new_path = stage.add_keywords(args.photo.resolve(), args.keywords)
        print(new_path)
        return 0

    if args.command == "report":
        reporter = ReportGenerator(media_root)
        reporter.generate_status_report(args.csv)
        for status, count in reporter.summary():
            print(f"{status:12s} {count}")
        return 0

    with CatalogDB(db_path) as conn:
        pipeline = ImportPipeline(media_root, PhotoCatalog(conn))

        if args.command == "import":
            outcomes = pipeline.import_images(show_progress=True)
            return 0 if all(isinstance(o, Imported) for o in outcomes) else 2

        if args.command == "watch":
            loop = WatchLoop(pipeline, args.minutes, process_stage=stage if args.process else None)
            loop.run()
            return 0

        if args.command == "thumbs":
            pipeline.regen_thumbnails(args.path.resolve() if args.path else None, show_progress=True)
            return 0

        if args.command == "reindex":
            pipeline.rebuild_catalog(show_progress=True)
            return 0

    raise ValueError(f"Unknown command {args.command}")

def main(argv=None):
    args = parse_args(argv)

    media_root = args.media_root.resolve()
    setup_logging(media_root, args.verbose, args.log_file)

    logging.info("=== Photo Bank Started ===")
    logging.info(f"Media: {media_root}")

    ensure_layout(media_root)
    db_path = args.db if args.db else media_root / config.DEFAULT_DB_NAME

    try:
        sys.exit(run_command(args, media_root, db_path))
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error.")
        sys.exit(1)

if __name__ == "__main__":
    main()
