"""
Style image storage

Images are written to a local directory which the application republishes
as static files. Orders reference an image by its bare file name.
"""
import os
import re
import threading
import time
from dataclasses import dataclass
from typing import Optional

import structlog

from tailorshop.core.exceptions import StorageWriteError

logger = structlog.get_logger()

PLACEHOLDER_KEY = "temp"
NAME_MARKER = "-style-"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@dataclass
class ImageUpload:
    """An uploaded style image held in memory"""
    filename: str
    content: bytes

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename or "")[1]


class ArtifactStore:
    """Filesystem store for style images"""

    def __init__(self, directory: str):
        self.directory = directory
        self._lock = threading.Lock()
        self._last_stamp = 0

    def ensure_ready(self) -> None:
        """Create the storage directory if needed"""
        try:
            os.makedirs(self.directory, exist_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Cannot create upload directory {self.directory}") from e

    def _next_stamp(self) -> int:
        # Milliseconds since the epoch, never repeated within this process
        with self._lock:
            stamp = max(int(time.time() * 1000), self._last_stamp + 1)
            self._last_stamp = stamp
            return stamp

    def build_name(self, business_key: Optional[str], extension: str) -> str:
        """Name of the form {bill_number}-style-{millis}{ext}"""
        key = _UNSAFE_CHARS.sub("_", business_key) if business_key else PLACEHOLDER_KEY
        ext = _UNSAFE_CHARS.sub("_", extension or "")
        return f"{key}{NAME_MARKER}{self._next_stamp()}{ext}"

    def path_for(self, artifact_ref: str) -> str:
        return os.path.join(self.directory, os.path.basename(artifact_ref))

    def store(self, business_key: Optional[str], payload: bytes, original_extension: str) -> str:
        """Write the payload and return the name it is stored under"""
        name = self.build_name(business_key, original_extension)
        path = self.path_for(name)

        try:
            f = open(path, "xb")
        except OSError as e:
            logger.error("Failed to open style image for writing", path=path, error=str(e))
            raise StorageWriteError(f"Could not store style image for {business_key}") from e

        try:
            with f:
                f.write(payload)
        except OSError as e:
            logger.error("Failed to write style image", path=path, error=str(e))
            # Do not leave a truncated file behind
            self.delete(name)
            raise StorageWriteError(f"Could not store style image for {business_key}") from e

        logger.info("Style image stored", bill_number=business_key, image_path=name, size=len(payload))
        return name

    def delete(self, artifact_ref: Optional[str]) -> None:
        """Remove a stored image; failures are logged and swallowed"""
        if not artifact_ref:
            return

        path = self.path_for(artifact_ref)
        try:
            os.remove(path)
            logger.info("Style image deleted", image_path=artifact_ref)
        except FileNotFoundError:
            logger.warning("Style image already gone", image_path=artifact_ref)
        except OSError as e:
            logger.warning("Failed to delete style image", image_path=artifact_ref, error=str(e))
