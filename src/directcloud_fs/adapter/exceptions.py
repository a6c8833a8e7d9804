"""Storage-level failures raised by the DirectCloud adapter.

Each failure names the location it concerns and the reason reported by the
remote service (or by the adapter when a required target is missing). When
a DirectCloud API error triggered the failure it is chained as ``__cause__``.
"""

from __future__ import annotations


class FilesystemError(Exception):
    """Base class for every failure raised by the adapter."""

    action = "operate on"

    def __init__(self, location: str, reason: str = "") -> None:
        self.location = location
        self.reason = reason
        message = f"Unable to {self.action} location: {location}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class UnableToReadFile(FilesystemError):
    action = "read file from"


class UnableToWriteFile(FilesystemError):
    action = "write file to"


class UnableToDeleteFile(FilesystemError):
    action = "delete file at"


class UnableToDeleteDirectory(FilesystemError):
    action = "delete directory at"


class UnableToCreateDirectory(FilesystemError):
    action = "create directory at"


class UnableToSetVisibility(FilesystemError):
    action = "set visibility for file at"


class UnableToGeneratePublicUrl(FilesystemError):
    action = "generate public url for"


class UnableToRetrieveMetadata(FilesystemError):
    """Raised when size or modification time of a file cannot be fetched."""

    def __init__(self, location: str, metadata_type: str, reason: str = "") -> None:
        self.metadata_type = metadata_type
        self.action = f"retrieve the {metadata_type} for file at"
        super().__init__(location, reason)


class UnableToListContents(FilesystemError):
    action = "list contents for"

    def __init__(self, location: str, deep: bool, reason: str = "") -> None:
        self.deep = deep
        super().__init__(location, reason)


class UnableToMoveFile(FilesystemError):
    action = "move file"

    def __init__(self, source: str, destination: str, reason: str = "") -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"{source} -> {destination}", reason)


class UnableToCopyFile(FilesystemError):
    action = "copy file"

    def __init__(self, source: str, destination: str, reason: str = "") -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"{source} -> {destination}", reason)
