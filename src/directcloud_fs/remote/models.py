"""Data models for DirectCloud folder and file listing records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# Well-known node token of the account's root folder
ROOT_NODE = "1{2"

# DirectCloud JSON field names
FIELD_NODE = "node"
FIELD_DRIVE_PATH = "drive_path"
FIELD_DIR_SEQ = "dir_seq"
FIELD_FILE_SEQ = "file_seq"
FIELD_NAME = "name"
FIELD_SIZE = "size"
FIELD_DATETIME = "datetime"
FIELD_DATETIME_AT = "datetime_at"
FIELD_NEW_FILE_SEQ = "new_file_seq"
FIELD_URL = "url"

# Response envelope keys
RESPONSE_FOLDERS = "folders"
RESPONSE_FILES = "files"
RESPONSE_RESULT = "result"
RESPONSE_DATA = "data"


@dataclass(frozen=True)
class FolderRecord:
    """A remote folder as returned by the folder listing.

    Attributes:
        node: Opaque node token addressing the folder.
        drive_path: Full display path of the folder (e.g. "/a/b").
        dir_seq: Numeric folder sequence, when the service reports one.
        datetime_at: Raw last-modified string, when reported.
    """

    node: str
    drive_path: str
    dir_seq: int | None = None
    datetime_at: str | None = None

    @classmethod
    def from_response(cls, raw: dict[str, Any]) -> FolderRecord:
        """Map a raw folder entry from a listing response to a FolderRecord."""
        return cls(
            node=str(raw[FIELD_NODE]),
            drive_path=raw.get(FIELD_DRIVE_PATH, ""),
            dir_seq=raw.get(FIELD_DIR_SEQ),
            datetime_at=raw.get(FIELD_DATETIME_AT),
        )


@dataclass(frozen=True)
class FileRecord:
    """A remote file inside a resolved parent folder."""

    file_seq: int | str
    name: str
    size: int | None = None
    datetime_at: str | None = None

    @classmethod
    def from_response(cls, raw: dict[str, Any]) -> FileRecord:
        """Map a raw file entry from a listing response to a FileRecord."""
        size = raw.get(FIELD_SIZE)
        return cls(
            file_seq=raw[FIELD_FILE_SEQ],
            name=raw.get(FIELD_NAME, ""),
            size=int(size) if size is not None else None,
            datetime_at=raw.get(FIELD_DATETIME_AT),
        )


@dataclass
class FolderListing:
    """Parsed contents of one DirectCloud folder (one ``get_list`` call)."""

    node: str
    folders: list[FolderRecord]
    files: list[FileRecord]

    @classmethod
    def from_response(cls, node: str, response: dict[str, Any]) -> FolderListing:
        """Build a listing from a raw ``get_list`` response.

        Missing or null ``folders`` / ``files`` keys are treated as empty.
        """
        return cls(
            node=node,
            folders=[FolderRecord.from_response(f) for f in response.get(RESPONSE_FOLDERS) or []],
            files=[FileRecord.from_response(f) for f in response.get(RESPONSE_FILES) or []],
        )


def parse_timestamp(value: str | None) -> int | None:
    """Convert a DirectCloud datetime string (e.g. "2024-03-01 12:30:00") to a Unix timestamp.

    Naive values are interpreted in local time. Returns None for missing or
    unparseable values.
    """
    if not value:
        return None
    try:
        return int(datetime.fromisoformat(value).timestamp())
    except ValueError:
        return None
