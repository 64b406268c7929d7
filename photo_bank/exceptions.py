"""
Custom exception hierarchy for the photo bank.

Every error raised while importing a single photo carries an ErrorKind, so the
import pipeline can report *why* a photo ended up in quarantine without the
caller having to catch anything.
"""
from enum import Enum


class ErrorKind(str, Enum):
    METADATA_UNREADABLE = "metadata_unreadable"
    PATH_NOT_UNDER_ROOT = "path_not_under_root"
    MOVE_FAILED = "move_failed"
    RESIZE_FAILED = "resize_failed"
    CATALOG_WRITE_FAILED = "catalog_write_failed"


class PhotoBankError(Exception):
    """Base exception for all photo bank errors."""
    kind: ErrorKind


class MetadataUnreadableError(PhotoBankError):
    """Raised when no capture timestamp can be read from a photo."""
    kind = ErrorKind.METADATA_UNREADABLE


class PathNotUnderRootError(PhotoBankError, ValueError):
    """Raised when a path that must live in the media root does not."""
    kind = ErrorKind.PATH_NOT_UNDER_ROOT


class MoveFailedError(PhotoBankError):
    """Raised when a photo cannot be renamed into place."""
    kind = ErrorKind.MOVE_FAILED


class ResizeFailedError(PhotoBankError):
    """Raised when a thumbnail cannot be generated or written."""
    kind = ErrorKind.RESIZE_FAILED


class CatalogWriteFailedError(PhotoBankError):
    """Raised when the catalog rejects a record."""
    kind = ErrorKind.CATALOG_WRITE_FAILED


class QuarantineFailedError(PhotoBankError):
    """
    Raised when a failed photo cannot be moved into _failed.

    There is no fallback location after quarantine, so this one is never
    converted into an outcome; it propagates to whoever ran the batch.
    """
    kind = ErrorKind.MOVE_FAILED
