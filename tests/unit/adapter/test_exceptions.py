"""Unit tests for adapter/exceptions.py and adapter/attributes.py."""

from directcloud_fs.adapter.attributes import DirectoryAttributes, FileAttributes
from directcloud_fs.adapter.exceptions import (
    FilesystemError,
    UnableToListContents,
    UnableToMoveFile,
    UnableToReadFile,
    UnableToRetrieveMetadata,
)


class TestFilesystemErrors:
    def test_message_includes_location_and_reason(self) -> None:
        err = UnableToReadFile("/a.txt", "File not found.")
        assert str(err) == "Unable to read file from location: /a.txt. File not found."
        assert err.location == "/a.txt"
        assert err.reason == "File not found."

    def test_reason_is_optional(self) -> None:
        assert str(UnableToReadFile("/a.txt")) == "Unable to read file from location: /a.txt."

    def test_all_failures_share_base(self) -> None:
        assert isinstance(UnableToListContents("/a", deep=False), FilesystemError)

    def test_metadata_failure_names_metadata_type(self) -> None:
        err = UnableToRetrieveMetadata("/a.txt", "file_size", "boom")
        assert err.metadata_type == "file_size"
        assert "retrieve the file_size" in str(err)

    def test_move_failure_keeps_both_paths(self) -> None:
        err = UnableToMoveFile("/a.txt", "/b.txt", "denied")
        assert err.source == "/a.txt"
        assert err.destination == "/b.txt"
        assert "/a.txt -> /b.txt" in str(err)


class TestAttributes:
    def test_file_attributes_defaults(self) -> None:
        attrs = FileAttributes("a.txt")
        assert attrs.is_file()
        assert not attrs.is_dir()
        assert attrs.file_size is None
        assert attrs.visibility is None
        assert attrs.type == "file"

    def test_directory_attributes(self) -> None:
        attrs = DirectoryAttributes("a", last_modified=10)
        assert attrs.is_dir()
        assert not attrs.is_file()
        assert attrs.type == "dir"
