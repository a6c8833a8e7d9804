"""Attribute records returned by adapter listings and metadata accessors."""

from __future__ import annotations

from dataclasses import dataclass

VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"

TYPE_FILE = "file"
TYPE_DIRECTORY = "dir"


@dataclass(frozen=True)
class FileAttributes:
    """Attributes of a single file.

    Only the fields relevant to the call that produced the record are set;
    the others stay None.

    Attributes:
        path: Path relative to the adapter prefix (e.g. "docs/report.pdf").
        file_size: Size in bytes.
        visibility: Always None, DirectCloud has no visibility concept.
        last_modified: Unix timestamp of the last modification.
        mime_type: MIME type derived from the path's extension.
    """

    path: str
    file_size: int | None = None
    visibility: str | None = None
    last_modified: int | None = None
    mime_type: str | None = None

    type = TYPE_FILE

    def is_file(self) -> bool:
        return True

    def is_dir(self) -> bool:
        return False


@dataclass(frozen=True)
class DirectoryAttributes:
    """Attributes of a single directory."""

    path: str
    visibility: str | None = None
    last_modified: int | None = None

    type = TYPE_DIRECTORY

    def is_file(self) -> bool:
        return False

    def is_dir(self) -> bool:
        return True


StorageAttributes = FileAttributes | DirectoryAttributes
