"""Filesystem operations for user-supplied images.

All blocking calls run in a worker thread so request handlers never block
the event loop.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path, PurePosixPath

from foodies.observability.logging import get_logger


logger = get_logger(__name__)


class FileStorage:
    """Moves and removes files under a public directory.

    Files under ``public_dir`` are served at ``public_prefix``; for example
    ``<public_dir>/recipes/a.png`` is reachable at ``/public/recipes/a.png``.
    """

    def __init__(self, public_dir: Path, public_prefix: str = "/public") -> None:
        self.public_dir = Path(public_dir)
        self.public_prefix = "/" + public_prefix.strip("/")

    # =========================================================================
    # Path mapping
    # =========================================================================

    def public_path(self, *parts: str) -> str:
        """Public URL path for a file stored under ``public_dir``."""
        return str(PurePosixPath(self.public_prefix, *parts))

    def local_path(self, public_path: str) -> Path | None:
        """Map a public path back to its file, or None if it is not ours."""
        prefix = self.public_prefix + "/"
        if not public_path.startswith(prefix):
            return None
        relative = PurePosixPath(public_path[len(prefix) :])
        if ".." in relative.parts:
            return None
        return self.public_dir.joinpath(*relative.parts)

    # =========================================================================
    # Operations
    # =========================================================================

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(Path(path).is_file)

    async def ensure_dir(self, directory: Path) -> None:
        await asyncio.to_thread(Path(directory).mkdir, parents=True, exist_ok=True)

    async def move(self, source: Path, destination: Path) -> Path:
        """Move ``source`` to ``destination``, creating parent directories.

        Raises:
            OSError: If the file cannot be moved.
        """
        destination = Path(destination)
        await self.ensure_dir(destination.parent)
        await asyncio.to_thread(shutil.move, str(source), str(destination))
        logger.debug("File moved", source=str(source), destination=str(destination))
        return destination

    async def delete(self, path: Path) -> bool:
        """Remove a file, best effort.

        Failures are logged and reported as False, never raised.
        """
        try:
            await asyncio.to_thread(Path(path).unlink)
        except FileNotFoundError:
            logger.warning("File to delete is already gone", path=str(path))
            return False
        except OSError as e:
            logger.error("Failed to delete file", path=str(path), error=str(e))
            return False
        return True

    async def delete_public(self, public_path: str | None) -> bool:
        """Best-effort removal of a file referenced by its public path."""
        if not public_path:
            return False
        local = self.local_path(public_path)
        if local is None:
            return False
        return await self.delete(local)
