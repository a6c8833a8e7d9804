"""A filesystem-like object that follows ``fsspec`` and delegates to a DirectCloudAdapter.

Adapter failures for missing targets surface as ``FileNotFoundError``; every
other adapter failure surfaces as ``OSError`` with the adapter error chained.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fsspec import AbstractFileSystem
from fsspec.spec import AbstractBufferedFile

from directcloud_fs.adapter.attributes import TYPE_DIRECTORY, StorageAttributes
from directcloud_fs.adapter.directcloud import DIRECTORY_NOT_FOUND, FILE_NOT_FOUND
from directcloud_fs.adapter.exceptions import FilesystemError

if TYPE_CHECKING:
    from directcloud_fs.adapter.directcloud import DirectCloudAdapter

logger = logging.getLogger(__name__)

FSSPEC_FILE = "file"
FSSPEC_DIRECTORY = "directory"


def _os_error(exc: FilesystemError) -> OSError:
    if exc.reason in (FILE_NOT_FOUND, DIRECTORY_NOT_FOUND):
        return FileNotFoundError(exc.location)
    return OSError(str(exc))


def _entry(attributes: StorageAttributes) -> dict[str, Any]:
    """Map adapter attributes to an fsspec ``ls``/``info`` entry."""
    if attributes.type == TYPE_DIRECTORY:
        return {
            "name": attributes.path,
            "size": 0,
            "type": FSSPEC_DIRECTORY,
            "mtime": attributes.last_modified,
        }
    return {
        "name": attributes.path,
        "size": attributes.file_size or 0,
        "type": FSSPEC_FILE,
        "mtime": attributes.last_modified,
        "mimetype": attributes.mime_type,
    }


class DirectCloudFileSystem(AbstractFileSystem):
    protocol = "directcloud"
    cachable = False

    def __init__(self, adapter: DirectCloudAdapter, **storage_options: Any) -> None:
        super().__init__(**storage_options)
        self.adapter = adapter

    def ls(self, path: str, detail: bool = True, **kwargs: Any) -> list[Any]:
        path = self._strip_protocol(path)
        try:
            entries = [_entry(attrs) for attrs in self.adapter.list_contents(path)]
        except FilesystemError as exc:
            if not self.adapter.file_exists(path):
                raise _os_error(exc) from exc
            entries = [self.info(path)]
        if detail:
            return entries
        return [entry["name"] for entry in entries]

    def info(self, path: str, **kwargs: Any) -> dict[str, Any]:
        path = self._strip_protocol(path)
        if self.adapter.directory_exists(path):
            return {"name": path, "size": 0, "type": FSSPEC_DIRECTORY}
        if not self.adapter.file_exists(path):
            raise FileNotFoundError(path)
        try:
            size = self.adapter.file_size(path).file_size
            modified = self.adapter.last_modified(path).last_modified
        except FilesystemError as exc:
            raise _os_error(exc) from exc
        return {
            "name": path,
            "size": size or 0,
            "type": FSSPEC_FILE,
            "mtime": modified,
            "mimetype": self.adapter.mime_type(path).mime_type,
        }

    def cat_file(
        self, path: str, start: int | None = None, end: int | None = None, **kwargs: Any
    ) -> bytes:
        try:
            data = self.adapter.read(self._strip_protocol(path))
        except FilesystemError as exc:
            raise _os_error(exc) from exc
        return data[start:end]

    def pipe_file(self, path: str, value: bytes, **kwargs: Any) -> None:
        try:
            self.adapter.write(self._strip_protocol(path), value)
        except FilesystemError as exc:
            raise _os_error(exc) from exc

    def rm_file(self, path: str) -> None:
        try:
            self.adapter.delete(self._strip_protocol(path))
        except FilesystemError as exc:
            raise _os_error(exc) from exc

    def rm(self, path: Any, recursive: bool = False, maxdepth: int | None = None) -> None:
        """Remove files, or whole directories when ``recursive`` is set.

        ``path`` may be a single path, a glob, or a list of either. A matched
        directory is removed with one remote call, taking everything below it,
        so ``maxdepth`` only limits how far the paths are expanded.
        """
        removed: list[str] = []
        for p in self.expand_path(path, recursive=recursive, maxdepth=maxdepth):
            if any(p.startswith(d + "/") for d in removed):
                continue
            if self.isdir(p):
                if not recursive:
                    raise IsADirectoryError(p)
                self.rmdir(p)
                removed.append(p)
            else:
                self.rm_file(p)

    def mkdir(self, path: str, create_parents: bool = True, **kwargs: Any) -> None:
        path = self._strip_protocol(path)
        if not create_parents and not self.adapter.directory_exists(self._parent(path)):
            raise FileNotFoundError(self._parent(path))
        try:
            self.adapter.create_directory(path)
        except FilesystemError as exc:
            raise _os_error(exc) from exc

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        path = self._strip_protocol(path)
        if not exist_ok and self.adapter.directory_exists(path):
            raise FileExistsError(path)
        self.mkdir(path, create_parents=True)

    def rmdir(self, path: str) -> None:
        try:
            self.adapter.delete_directory(self._strip_protocol(path))
        except FilesystemError as exc:
            raise _os_error(exc) from exc

    def mv(self, path1: str, path2: str, **kwargs: Any) -> None:
        try:
            self.adapter.move(self._strip_protocol(path1), self._strip_protocol(path2))
        except FilesystemError as exc:
            raise _os_error(exc) from exc

    def cp_file(self, path1: str, path2: str, **kwargs: Any) -> None:
        try:
            self.adapter.copy(self._strip_protocol(path1), self._strip_protocol(path2))
        except FilesystemError as exc:
            raise _os_error(exc) from exc

    def _open(
        self,
        path,
        mode="rb",
        block_size=None,
        autocommit=True,
        cache_options=None,
        **kwargs,
    ):
        return DirectCloudFile(
            self,
            path,
            mode,
            block_size,
            autocommit,
            cache_options=cache_options,
            **kwargs,
        )


class DirectCloudFile(AbstractBufferedFile):
    """Buffered file whose reads download once and whose writes upload on close.

    DirectCloud has no ranged download or multipart upload, so the whole
    file travels in one call either way.
    """

    _content: bytes | None = None

    def _fetch_range(self, start, end):
        if self._content is None:
            self._content = self.fs.cat_file(self.path)
        return self._content[start:end]

    def _initiate_upload(self):
        logger.debug("[DirectCloudFile] buffering upload; path:%s", self.path)

    def _upload_chunk(self, final=False):
        if not final:
            # Keep buffering until close; only whole-file uploads are possible.
            return False
        self.buffer.seek(0)
        self.fs.pipe_file(self.path, self.buffer.read())
        return True
