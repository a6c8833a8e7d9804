"""Path prefixing: confine the adapter to a sub-tree of the DirectCloud account."""

from __future__ import annotations

from directcloud_fs.remote.resolver import join_path, split_path


class PathPrefixer:
    """Maps adapter-relative paths to absolute remote locations and back."""

    def __init__(self, prefix: str = "") -> None:
        self._prefix_parts = split_path(prefix)

    @property
    def prefix(self) -> str:
        return join_path(self._prefix_parts)

    def prefix_path(self, path: str) -> str:
        """Return the normalised absolute location for an adapter path.

        The result always starts with ``/`` and has no trailing or empty
        segments (e.g. prefix "base", path "a//b/" -> "/base/a/b").
        """
        return join_path(self._prefix_parts + split_path(path))

    def strip_prefix(self, location: str) -> str:
        """Return ``location`` relative to the prefix, without a leading ``/``."""
        parts = split_path(location)
        width = len(self._prefix_parts)
        if parts[:width] == self._prefix_parts:
            parts = parts[width:]
        return "/".join(parts)
