"""Intake of multipart image uploads into the temporary directory."""

from __future__ import annotations

import asyncio
import re
import time
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Final

from foodies.observability.logging import get_logger
from foodies.services.errors import FileTooLargeError, InvalidFileTypeError


if TYPE_CHECKING:
    from fastapi import UploadFile

    from foodies.core.config.settings import UploadSettings


logger = get_logger(__name__)

CHUNK_SIZE: Final[int] = 64 * 1024

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")
_EXTENSIONS: Final[dict[str, str]] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


def upload_filename(original: str | None, content_type: str, now_ms: int) -> str:
    """Build ``<ms>-<sanitized base><ext>`` for a stored upload.

    The base keeps only ASCII letters, digits, ``_`` and ``-``. The extension
    comes from the original name when it is purely alphanumeric, otherwise
    from the content type.
    """
    name = PurePath(original or "").name
    suffix = PurePath(name).suffix
    base = _UNSAFE_CHARS.sub("", name[: len(name) - len(suffix)] if suffix else name)
    if not suffix[1:].isalnum():
        suffix = _EXTENSIONS.get(content_type, "")
    return f"{now_ms}-{base}{suffix.lower()}"


async def save_upload(
    upload: UploadFile,
    tmp_dir: Path,
    limits: UploadSettings,
) -> Path:
    """Validate and store an uploaded image under ``tmp_dir``.

    Args:
        upload: The multipart file.
        tmp_dir: Directory for unclaimed uploads.
        limits: Accepted content types and maximum size.

    Returns:
        Path of the stored file.

    Raises:
        InvalidFileTypeError: If the content type is not an accepted image type.
        FileTooLargeError: If the body exceeds ``limits.max_bytes``.
    """
    content_type = (upload.content_type or "").lower()
    if content_type not in limits.allowed_content_types:
        raise InvalidFileTypeError

    await asyncio.to_thread(Path(tmp_dir).mkdir, parents=True, exist_ok=True)
    target = Path(tmp_dir) / upload_filename(
        upload.filename, content_type, time.time_ns() // 1_000_000
    )

    written = 0
    handle = await asyncio.to_thread(target.open, "wb")
    try:
        while chunk := await upload.read(CHUNK_SIZE):
            written += len(chunk)
            if written > limits.max_bytes:
                raise FileTooLargeError(
                    f"File exceeds the {limits.max_bytes // (1024 * 1024)} MB limit"
                )
            await asyncio.to_thread(handle.write, chunk)
    except BaseException:
        await asyncio.to_thread(handle.close)
        await asyncio.to_thread(target.unlink, missing_ok=True)
        raise
    await asyncio.to_thread(handle.close)

    logger.debug("Upload stored", path=str(target), size=written)
    return target
