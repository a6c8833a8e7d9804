"""MIME type detection from path strings."""

from __future__ import annotations

import mimetypes
from typing import Protocol


class MimeTypeDetector(Protocol):
    def detect_mime_type_from_path(self, path: str) -> str | None: ...


class ExtensionMimeTypeDetector:
    """Guesses a MIME type from the file extension only; content is never inspected."""

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        """Initialise the detector.

        Args:
            overrides: Extra extension-to-MIME mappings (e.g. {".md": "text/markdown"})
                consulted before the standard table. Keys are matched case-insensitively.
        """
        self._overrides = {ext.lower(): mime for ext, mime in (overrides or {}).items()}

    def detect_mime_type_from_path(self, path: str) -> str | None:
        name = path.rsplit("/", 1)[-1]
        dot = name.rfind(".")
        extension = name[dot:].lower() if dot > 0 else ""
        if extension in self._overrides:
            return self._overrides[extension]
        mime_type, _ = mimetypes.guess_type(name)
        return mime_type
