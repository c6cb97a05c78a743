"""Local file storage for uploads, avatars and recipe images."""

from foodies.storage.files import FileStorage
from foodies.storage.uploads import save_upload


__all__ = ["FileStorage", "save_upload"]
