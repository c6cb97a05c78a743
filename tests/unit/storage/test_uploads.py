"""Unit tests for multipart upload intake."""

from __future__ import annotations

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from foodies.core.config.settings import UploadSettings
from foodies.services import errors
from foodies.storage.uploads import save_upload, upload_filename


def _upload(content: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestUploadFilename:
    """Tests for upload_filename."""

    @pytest.mark.parametrize(
        ("original", "content_type", "expected"),
        [
            ("cake.png", "image/png", "1700000000000-cake.png"),
            ("My Cake!.JPG", "image/jpeg", "1700000000000-MyCake.jpg"),
            ("../../etc/passwd.png", "image/png", "1700000000000-passwd.png"),
            ("noext", "image/webp", "1700000000000-noext.webp"),
            (None, "image/png", "1700000000000-.png"),
        ],
    )
    def test_sanitizes(self, original, content_type, expected):
        """Should keep only safe characters and prefix the timestamp."""
        assert upload_filename(original, content_type, 1_700_000_000_000) == expected


class TestSaveUpload:
    """Tests for save_upload."""

    async def test_stores_file(self, tmp_path):
        """Should write the upload into the temporary directory."""
        path = await save_upload(
            _upload(b"image-bytes", "dish.png", "image/png"),
            tmp_path / "tmp",
            UploadSettings(),
        )

        assert path.parent == tmp_path / "tmp"
        assert path.read_bytes() == b"image-bytes"
        assert path.name.endswith("-dish.png")

    async def test_rejects_unsupported_type(self, tmp_path):
        """Should raise InvalidFileTypeError and write nothing."""
        with pytest.raises(errors.InvalidFileTypeError):
            await save_upload(
                _upload(b"GIF89a", "anim.gif", "image/gif"),
                tmp_path / "tmp",
                UploadSettings(),
            )

        assert not (tmp_path / "tmp").exists()

    async def test_rejects_oversized_file(self, tmp_path):
        """Should raise FileTooLargeError and remove the partial file."""
        limits = UploadSettings(max_bytes=1024)

        with pytest.raises(errors.FileTooLargeError):
            await save_upload(
                _upload(b"x" * 4096, "big.png", "image/png"),
                tmp_path / "tmp",
                limits,
            )

        assert list((tmp_path / "tmp").iterdir()) == []
