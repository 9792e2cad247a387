# ABOUTME: Character portrait storage: full image plus a small thumbnail
# ABOUTME: Downloads through the wiki client and resizes in memory with Pillow

import asyncio
import io
from pathlib import Path

from PIL import Image

from nikkedex.config import get_config
from nikkedex.core.models import NikkeListEntry
from nikkedex.fetch.wiki import WikiClient
from nikkedex.utils.logging import get_logger

logger = get_logger(__name__)


def make_thumbnail(data: bytes, size: int) -> bytes:
    """Shrink an image to fit a size x size box, keeping its aspect ratio and format."""
    with Image.open(io.BytesIO(data)) as img:
        image_format = img.format or "PNG"
        img.thumbnail((size, size), Image.Resampling.LANCZOS)
        buffer = io.BytesIO()
        img.save(buffer, format=image_format)
    return buffer.getvalue()


class ImageProcessor:
    """Keeps ``big/`` and ``small/`` copies of every character portrait."""

    def __init__(self, client: WikiClient, image_dir: Path | None = None, thumbnail_size: int | None = None):
        config = get_config()
        self.client = client
        self.image_dir = image_dir or config.image_dir
        self.thumbnail_size = thumbnail_size or config.thumbnail_size

    @property
    def big_dir(self) -> Path:
        return self.image_dir / "big"

    @property
    def small_dir(self) -> Path:
        return self.image_dir / "small"

    async def update(self, entry: NikkeListEntry) -> bool:
        """Store the portrait for one entry.

        Returns False when the full image was already present and nothing was written.
        """
        filename = entry.image_filename
        big_path = self.big_dir / filename
        if big_path.exists():
            logger.debug("Image already stored", name=entry.name, path=str(big_path))
            return False

        data = await self.client.download(entry.image_url)
        thumbnail = await asyncio.to_thread(make_thumbnail, data, self.thumbnail_size)

        self.big_dir.mkdir(parents=True, exist_ok=True)
        self.small_dir.mkdir(parents=True, exist_ok=True)
        big_path.write_bytes(data)
        (self.small_dir / filename).write_bytes(thumbnail)

        logger.info("Stored character image", name=entry.name, filename=filename, size_bytes=len(data))
        return True
