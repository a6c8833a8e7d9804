"""Path resolution: translate logical paths into DirectCloud nodes and file sequences."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from directcloud_fs.remote.models import ROOT_NODE, FileRecord, FolderListing, FolderRecord

if TYPE_CHECKING:
    from directcloud_fs.remote.client import DirectCloudClient

logger = logging.getLogger(__name__)


def split_path(path: str) -> list[str]:
    """Return the non-empty segments of a slash-separated path, ignoring ``.``."""
    return [part for part in path.split("/") if part and part != "."]


def join_path(parts: list[str]) -> str:
    """Join segments back into an absolute path (``"/"`` for no segments)."""
    return "/" + "/".join(parts)


def parent_path(path: str) -> str:
    """Return the absolute parent directory of ``path`` (``"/"`` for top-level entries)."""
    return join_path(split_path(path)[:-1])


def base_name(path: str) -> str:
    """Return the last segment of ``path`` (empty for the root)."""
    parts = split_path(path)
    return parts[-1] if parts else ""


class PathResolver:
    """Walks logical paths from the root node, one folder listing per segment.

    Nothing is cached: every call re-lists each level from the root, so the
    result always reflects the remote tree at the time of the call. Remote
    errors raised by the client propagate unchanged.
    """

    def __init__(self, client: DirectCloudClient, root_node: str = ROOT_NODE) -> None:
        """Initialise the resolver.

        Args:
            client: DirectCloud client used for folder listings.
            root_node: Node token of the folder that ``/`` maps to.
        """
        self._client = client
        self._root_node = root_node

    @property
    def root(self) -> FolderRecord:
        """Record of the folder that ``/`` maps to."""
        return FolderRecord(node=self._root_node, drive_path="/")

    def list_folder(self, node: str) -> FolderListing:
        """List a folder node and parse the response."""
        return FolderListing.from_response(node, self._client.get_list(node))

    def resolve_folder(self, path: str) -> FolderRecord | None:
        """Resolve an absolute folder path to its remote folder record.

        The root path resolves to the root record without any remote call.
        Resolution stops at the first level whose listing is empty or has no
        folder whose ``drive_path`` equals the prefix being resolved.

        Args:
            path: Absolute, already-prefixed folder path (e.g. "/a/b").

        Returns:
            The matching FolderRecord, or None if any segment is absent.
        """
        parts = split_path(path)
        current = self.root
        for depth in range(1, len(parts) + 1):
            location = join_path(parts[:depth])
            folders = self.list_folder(current.node).folders
            if not folders:
                logger.debug(
                    "[resolve_folder] empty listing; path:%s;node:%s", location, current.node
                )
                return None
            match = next((f for f in folders if f.drive_path == location), None)
            if match is None:
                logger.debug("[resolve_folder] folder not found; path:%s", location)
                return None
            current = match
        return current

    def find_file(self, folder_node: str, name: str) -> FileRecord | None:
        """Find a file by exact name among the files directly under a folder node."""
        files = self.list_folder(folder_node).files
        return next((f for f in files if f.name == name), None)

    def locate_file(self, path: str) -> tuple[FolderRecord, FileRecord] | None:
        """Resolve an absolute file path to its parent folder and file records.

        Args:
            path: Absolute, already-prefixed file path (e.g. "/a/b/c.txt").

        Returns:
            A (FolderRecord, FileRecord) pair, or None when the parent folder
            or the file itself does not exist.
        """
        name = base_name(path)
        if not name:
            return None
        folder = self.resolve_folder(parent_path(path))
        if folder is None:
            return None
        file = self.find_file(folder.node, name)
        if file is None:
            return None
        return folder, file

    def resolve_file(self, path: str) -> FileRecord | None:
        """Resolve an absolute file path to its remote file record, or None."""
        located = self.locate_file(path)
        return located[1] if located is not None else None
