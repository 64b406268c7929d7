from pathlib import Path

from PIL import Image

from .. import config


class ThumbnailGenerator:
    """
    Small versions for browsing, made with Pillow.
    The source photo is only ever opened for reading.
    """

    def __init__(self, quality: int = config.THUMBNAIL_QUALITY):
        self.quality = quality

    def resize(self, path: Path, max_width: int, max_height: int) -> Image.Image:
        """Fits the image inside max_width x max_height, keeping its aspect ratio."""
        with Image.open(path) as im:
            im.thumbnail((max_width, max_height))
            return im.convert("RGB")

    def write_as_file(self, image: Image.Image, destination: Path):
        image.save(destination, "JPEG", quality=self.quality)
