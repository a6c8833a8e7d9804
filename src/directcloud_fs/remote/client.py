"""DirectCloud remote client contract and its failure type.

The HTTP wire protocol belongs to whichever DirectCloud client library the
caller supplies; the adapter only relies on the primitives below.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class DirectCloudApiError(Exception):
    """Raised by a DirectCloud client when the API rejects a request."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"DirectCloud API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


@runtime_checkable
class DirectCloudClient(Protocol):
    """Primitive DirectCloud operations consumed by the adapter.

    Every method raises DirectCloudApiError when the service rejects the call.
    """

    def get_list(self, node: str) -> dict[str, Any]:
        """List the sub-folders and files directly under a folder node."""
        ...

    def upload(self, node: str, contents: bytes, name: str) -> dict[str, Any]:
        """Upload ``contents`` as a file called ``name`` into a folder node."""
        ...

    def download(self, file_seq: int | str) -> bytes:
        """Return the full contents of a file."""
        ...

    def delete_file(self, node: str, file_seq: int | str) -> dict[str, Any]: ...

    def delete_folder(self, node: str) -> dict[str, Any]: ...

    def create_folder(self, node: str, name: str) -> dict[str, Any]:
        """Create a child folder and return a response carrying its ``node``."""
        ...

    def get_file_info(self, node: str, file_seq: int | str) -> dict[str, Any]:
        """Return ``{"result": {"size": ..., "datetime": ...}}`` for a file."""
        ...

    def move_file(self, dst_node: str, src_node: str, file_seq: int | str) -> dict[str, Any]: ...

    def copy_file(self, dst_node: str, src_node: str, file_seq: int | str) -> dict[str, Any]:
        """Copy a file and return ``{"data": {"new_file_seq": ...}}``."""
        ...

    def rename_file(self, node: str, file_seq: int | str, name: str) -> dict[str, Any]: ...

    def create_share_link(self, node: str, file_seq: int | str) -> dict[str, Any]:
        """Create a share link for a file and return a response carrying its ``url``."""
        ...
