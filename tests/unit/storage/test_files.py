"""Unit tests for FileStorage."""

from __future__ import annotations

from pathlib import Path

from foodies.storage import FileStorage


class TestPathMapping:
    """Tests for public_path and local_path."""

    def test_public_path(self, tmp_path):
        """Should join parts under the public prefix."""
        storage = FileStorage(tmp_path, "/public/")

        assert storage.public_path("recipes", "a.png") == "/public/recipes/a.png"

    def test_local_path(self, tmp_path):
        """Should map a public path back under the public directory."""
        storage = FileStorage(tmp_path)

        assert storage.local_path("/public/avatar/a.png") == tmp_path / "avatar" / "a.png"

    def test_foreign_paths_are_not_ours(self, tmp_path):
        """Should return None for external URLs and traversal attempts."""
        storage = FileStorage(tmp_path)

        assert storage.local_path("https://cdn.example.com/a.png") is None
        assert storage.local_path("/public/../secret.txt") is None


class TestOperations:
    """Tests for move and best-effort delete."""

    async def test_move_creates_parent(self, tmp_path):
        """Should create the destination directory."""
        source = tmp_path / "in.png"
        source.write_bytes(b"data")
        storage = FileStorage(tmp_path / "public")

        moved = await storage.move(source, tmp_path / "public" / "recipes" / "in.png")

        assert moved.read_bytes() == b"data"
        assert not source.exists()

    async def test_delete_missing_file_is_false(self, tmp_path):
        """Should report False instead of raising for a missing file."""
        storage = FileStorage(tmp_path)

        assert await storage.delete(tmp_path / "missing.png") is False

    async def test_delete_public_ignores_external(self, tmp_path):
        """Should not touch anything for external or empty paths."""
        storage = FileStorage(tmp_path)

        assert await storage.delete_public(None) is False
        assert await storage.delete_public("https://cdn.example.com/a.png") is False

    async def test_delete_public(self, tmp_path):
        """Should delete a file referenced by its public path."""
        target = Path(tmp_path / "avatar" / "a.png")
        target.parent.mkdir()
        target.write_bytes(b"data")
        storage = FileStorage(tmp_path)

        assert await storage.delete_public("/public/avatar/a.png") is True
        assert not target.exists()
