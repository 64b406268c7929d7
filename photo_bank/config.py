"""
Configuration constants for the photo bank.
"""

# --- Media Layout ---
# Special directories directly under the media root. Anything starting with
# an underscore is never treated as a category.
IMPORT_DIR = "_import"      # photos ready to import
PROCESS_DIR = "_process"    # photos waiting for keywords
FAILED_DIR = "_failed"      # photos that failed to import
THUMBS_DIR = "_thumbs"      # thumbnail mirror of the whole tree

SPECIAL_DIRS = (IMPORT_DIR, PROCESS_DIR, FAILED_DIR, THUMBS_DIR)

# --- File Type Definitions ---
# Only JPEGs are recognized; matched case-insensitively on the suffix.
JPEG_EXTS = {'.jpg'}

# --- Metadata Parsing ---
# EXIF time looks like: 2003:12:14 12:01:44
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# exifread prefixes its tag names with the IFD they came from. We regroup
# them under the names the rest of the code expects.
TAG_GROUPS = {
    'EXIF': 'Exif',
    'Image': 'Root',
}
DATE_GROUP, DATE_TAG = 'Exif', 'DateTimeOriginal'
ORIENTATION_GROUP, ORIENTATION_TAG = 'Root', 'Orientation'

# --- Thumbnails ---
THUMBNAIL_SIZE = 300  # bounding box 300x300
THUMBNAIL_QUALITY = 85

# --- Watching ---
DEFAULT_POLL_MINUTES = 5

# --- Catalog & Logs ---
DEFAULT_DB_NAME = "photo_catalog.db"
LOG_FILE_NAME = "photo_bank.log"
MEDIA_PATH_ENV = "PHOTO_BANK_MEDIA_PATH"
