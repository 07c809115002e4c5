"""
File receiver.

Stores the single binary part of an upload under a generated name:
``<random hex id>-<sanitized original filename>``. The random prefix keeps
names unique without relying on the clock, and files are created in
exclusive mode so an unexpected clash fails loudly instead of overwriting.
"""

from __future__ import annotations

import mimetypes
import re
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from ..utils.exceptions import FileMissingError
from ..utils.logger import get_logger
from .models import StoredFile

logger = get_logger(__name__)

FILE_FIELD = "file"
FALLBACK_NAME = "upload"
MAX_NAME_BYTES = 200

_UNSAFE_CHARS = re.compile(r"[\x00-\x1f\x7f/\\:]")


@dataclass
class IncomingFile:
    """A binary part as received from the multipart body."""
    filename: Optional[str]
    content_type: Optional[str]
    stream: BinaryIO


def sanitize_filename(original: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to a safe single path component.

    Directory parts (either separator style), control characters and
    leading dots are removed. Long names are cut to MAX_NAME_BYTES of UTF-8,
    keeping the extension, so the generated name fits a 255-byte limit.
    """
    name = (original or "").replace("\\", "/").split("/")[-1]
    name = _UNSAFE_CHARS.sub("", name).strip().lstrip(".")
    if not name:
        return FALLBACK_NAME
    if len(name.encode("utf-8")) > MAX_NAME_BYTES:
        suffix = Path(name).suffix[:20]
        stem = name[: len(name) - len(suffix)] if suffix else name
        budget = MAX_NAME_BYTES - len(suffix.encode("utf-8"))
        # errors="ignore" drops a multi-byte character split by the cut
        stem = stem.encode("utf-8")[:budget].decode("utf-8", errors="ignore")
        name = (stem + suffix).lstrip(".") or FALLBACK_NAME
    return name


def generate_name(original: Optional[str]) -> str:
    """Storage name for an upload."""
    return f"{uuid.uuid4().hex}-{sanitize_filename(original)}"


def guess_mime_type(filename: str, declared: Optional[str]) -> str:
    if declared:
        return declared
    return mimetypes.guess_type(filename)[0] or "application/octet-stream"


class FileReceiver:
    """Persists uploaded parts into one destination directory."""

    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)

    def ensure_directory(self) -> Path:
        """Create the destination directory if absent (idempotent)."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    def save(self, incoming: Optional[IncomingFile]) -> StoredFile:
        """
        Write the part to disk and describe it.

        Raises FileMissingError when no part (or a part without a filename)
        was sent.
        """
        if incoming is None or not incoming.filename:
            raise FileMissingError()

        generated = generate_name(incoming.filename)
        path = self.upload_dir / generated
        try:
            with open(path, "xb") as buffer:
                shutil.copyfileobj(incoming.stream, buffer)
        except FileExistsError:
            raise
        except Exception:
            # No partial files are left behind
            path.unlink(missing_ok=True)
            raise

        stored = StoredFile(
            generated_name=generated,
            original_name=incoming.filename,
            path=str(path),
            size_bytes=path.stat().st_size,
            mime_type=guess_mime_type(incoming.filename, incoming.content_type),
        )
        logger.info(
            "File stored",
            filename=stored.generated_name,
            size=stored.size_bytes,
            content_type=stored.mime_type,
        )
        return stored
