"""Blob storage for uploaded files (profile pictures)."""

import asyncio
import mimetypes
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..config import get_settings
from .logging import get_logger

logger = get_logger("storage")


def detect_image_type(data: bytes) -> Optional[str]:
    """Sniff the MIME type of raster image bytes; None if Pillow cannot parse them."""
    try:
        with Image.open(BytesIO(data)) as image:
            mime_type = Image.MIME.get(image.format or "")
            image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        return None
    return mime_type


class LocalBlobStore:
    """Stores blobs on the local filesystem and exposes them under a public URL.

    Files land in ``<root>/<prefix>/<uuid><ext>``; the returned URL is
    ``<base_url>/<prefix>/<uuid><ext>``.
    """

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    async def put(self, prefix: str, data: bytes, content_type: str) -> str:
        """Persist ``data`` under ``prefix`` and return its relative path."""
        extension = mimetypes.guess_extension(content_type) or ""
        relative_path = f"{prefix}/{uuid.uuid4().hex}{extension}"
        target = self.root / relative_path

        await asyncio.to_thread(self._write, target, data)
        logger.info(f"Stored blob {relative_path} ({len(data)} bytes)")
        return relative_path

    def url_for(self, relative_path: str) -> str:
        return f"{self.base_url}/{relative_path}"

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)


# Singleton instance
_blob_store: Optional[LocalBlobStore] = None


def get_blob_store() -> LocalBlobStore:
    """Get blob store singleton."""
    global _blob_store
    if _blob_store is None:
        settings = get_settings()
        _blob_store = LocalBlobStore(settings.storage_root, settings.storage_url)
    return _blob_store
