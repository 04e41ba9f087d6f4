from pathlib import Path
from typing import Protocol


class ImageStorage(Protocol):
    def save(self, data: bytes, filename: str, content_type: str) -> str:
        """Persist ``data`` under ``filename`` and return its public URL."""
        ...


class LocalImageStorage:
    """Writes uploads to a directory served as static files."""

    def __init__(self, upload_dir: str | Path, url_prefix: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, data: bytes, filename: str, content_type: str) -> str:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / filename).write_bytes(data)
        return f"{self.url_prefix}/{filename}"
