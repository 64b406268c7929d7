from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from .exceptions import ErrorKind

# Tags as handed over by a metadata reader: {"Exif": {...}, "Root": {...}}
Tags = Dict[str, Dict[str, str]]


@dataclass(frozen=True)
class MediaFile:
    """
    A handle on a file somewhere in the media tree.
    Never cached: the file system is the only record of where a photo is.
    """
    path: Path

    @classmethod
    def of(cls, path: Union[str, Path]) -> "MediaFile":
        return cls(Path(path))

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip('.')

    @property
    def parent(self) -> Path:
        return self.path.parent


@dataclass
class CaptureMetadata:
    captured_at: datetime
    orientation: Optional[str] = None
    tags: Tags = field(default_factory=dict)


@dataclass
class CatalogRecord:
    """
    What the catalog stores for one imported photo, keyed by its path.
    """
    path: str
    filename: str
    name: str
    category: str
    keywords: List[str]

    @property
    def id(self) -> str:
        return self.path


class ImportState(str, Enum):
    PENDING = "pending"
    METADATA_EXTRACTED = "metadata_extracted"
    MOVED = "moved"
    THUMBNAIL_CREATED = "thumbnail_created"
    REGISTERED = "registered"
    QUARANTINED = "quarantined"


@dataclass
class Imported:
    source: Path
    record: CatalogRecord

    @property
    def path(self) -> Path:
        return Path(self.record.path)


@dataclass
class Quarantined:
    source: Path
    path: Path              # where the photo sits now, inside _failed
    kind: ErrorKind
    error: Exception
    state: ImportState      # last state reached before the failure


ImportOutcome = Union[Imported, Quarantined]
