"""DirectCloud filesystem adapter: path-based storage operations over node-addressed folders."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator, Mapping
from typing import IO, TYPE_CHECKING, Any

from directcloud_fs.adapter.attributes import DirectoryAttributes, FileAttributes, StorageAttributes
from directcloud_fs.adapter.exceptions import (
    UnableToCopyFile,
    UnableToCreateDirectory,
    UnableToDeleteDirectory,
    UnableToDeleteFile,
    UnableToGeneratePublicUrl,
    UnableToListContents,
    UnableToMoveFile,
    UnableToReadFile,
    UnableToRetrieveMetadata,
    UnableToSetVisibility,
    UnableToWriteFile,
)
from directcloud_fs.adapter.mime import ExtensionMimeTypeDetector, MimeTypeDetector
from directcloud_fs.adapter.prefixer import PathPrefixer
from directcloud_fs.config import DEFAULT_SPOOL_MAX_BYTES
from directcloud_fs.remote.client import DirectCloudApiError, DirectCloudClient
from directcloud_fs.remote.models import (
    FIELD_DATETIME,
    FIELD_NEW_FILE_SEQ,
    FIELD_NODE,
    FIELD_SIZE,
    FIELD_URL,
    RESPONSE_DATA,
    RESPONSE_RESULT,
    ROOT_NODE,
    FolderListing,
    FolderRecord,
    parse_timestamp,
)
from directcloud_fs.remote.resolver import (
    PathResolver,
    base_name,
    join_path,
    parent_path,
    split_path,
)

if TYPE_CHECKING:
    from directcloud_fs.config import AdapterConfig

logger = logging.getLogger(__name__)

METADATA_FILE_SIZE = "file_size"
METADATA_LAST_MODIFIED = "last_modified"

FILE_NOT_FOUND = "File not found."
DIRECTORY_NOT_FOUND = "Directory not found."


class DirectCloudAdapter:
    """Filesystem adapter backed by the DirectCloud API.

    Every operation prefixes the requested path, resolves it to remote
    addressing by walking the folder tree from the root node, then issues
    the remote call. Resolutions are never cached between calls.
    """

    def __init__(
        self,
        client: DirectCloudClient,
        prefix: str = "",
        mime_type_detector: MimeTypeDetector | None = None,
        root_node: str = ROOT_NODE,
        spool_max_bytes: int = DEFAULT_SPOOL_MAX_BYTES,
    ) -> None:
        """Initialise the adapter.

        Args:
            client: DirectCloud client providing the remote primitives.
            prefix: Sub-tree of the account every path is resolved under.
            mime_type_detector: Detector used for mime_type() and listings;
                defaults to an extension-based detector.
            root_node: Node token of the account root folder.
            spool_max_bytes: In-memory limit of streams returned by read_stream().
        """
        self._client = client
        self._prefixer = PathPrefixer(prefix)
        self._resolver = PathResolver(client, root_node)
        self._mime_type_detector = mime_type_detector or ExtensionMimeTypeDetector()
        self._spool_max_bytes = spool_max_bytes

    @property
    def client(self) -> DirectCloudClient:
        """The client that performs the remote calls."""
        return self._client

    @property
    def resolver(self) -> PathResolver:
        """The resolver that maps prefixed paths to remote records."""
        return self._resolver

    # ------------------------------------------------------------------
    # Existence checks
    # ------------------------------------------------------------------

    def file_exists(self, path: str) -> bool:
        location = self._prefixer.prefix_path(path)
        try:
            return self._resolver.resolve_file(location) is not None
        except DirectCloudApiError as exc:
            logger.warning(
                "[file_exists] api error treated as absent; location:%s;error:%s",
                location,
                exc.message,
            )
            return False

    def directory_exists(self, path: str) -> bool:
        location = self._prefixer.prefix_path(path)
        try:
            return self._resolver.resolve_folder(location) is not None
        except DirectCloudApiError as exc:
            logger.warning(
                "[directory_exists] api error treated as absent; location:%s;error:%s",
                location,
                exc.message,
            )
            return False

    def has(self, path: str) -> bool:
        """Return True when ``path`` names an existing file or directory."""
        return self.file_exists(path) or self.directory_exists(path)

    # ------------------------------------------------------------------
    # Reading and writing
    # ------------------------------------------------------------------

    def read(self, path: str) -> bytes:
        """Download the full contents of a file.

        Raises:
            UnableToReadFile: If the file does not exist or the download fails.
        """
        location = self._prefixer.prefix_path(path)
        try:
            located = self._resolver.locate_file(location)
            if located is None:
                raise UnableToReadFile(location, FILE_NOT_FOUND)
            _, file = located
            return self._client.download(file.file_seq)
        except DirectCloudApiError as exc:
            raise UnableToReadFile(location, exc.message) from exc

    def read_stream(self, path: str) -> IO[bytes]:
        """Return the contents of a file as a rewound, single-use binary stream.

        The caller owns the stream and must close it once consumed.
        """
        contents = self.read(path)
        stream = tempfile.SpooledTemporaryFile(max_size=self._spool_max_bytes)
        stream.write(contents)
        stream.seek(0)
        return stream

    def write(
        self,
        path: str,
        contents: bytes | str,
        config: Mapping[str, Any] | None = None,
    ) -> None:
        """Upload ``contents`` to ``path``, creating missing parent directories.

        Raises:
            UnableToWriteFile: If the upload fails or the parent cannot be resolved.
            UnableToCreateDirectory: If a missing parent directory cannot be created.
        """
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        self._upload(self._prefixer.prefix_path(path), contents)

    def write_stream(
        self,
        path: str,
        stream: IO[bytes] | IO[str],
        config: Mapping[str, Any] | None = None,
    ) -> None:
        """Upload the remaining contents of ``stream`` to ``path``.

        The stream is read but not closed.
        """
        self.write(path, stream.read(), config)

    def _upload(self, location: str, contents: bytes) -> None:
        name = base_name(location)
        if not name:
            raise UnableToWriteFile(location, "Path does not name a file.")
        parent = parent_path(location)
        try:
            folder = self._resolver.resolve_folder(parent)
            if folder is None:
                logger.info("[write] parent directory missing, creating; location:%s", parent)
                self._create_directory_at(parent)
                folder = self._resolver.resolve_folder(parent)
            if folder is None:
                raise UnableToWriteFile(location, "Parent directory missing after creation.")
            self._client.upload(folder.node, contents, name)
        except DirectCloudApiError as exc:
            raise UnableToWriteFile(location, exc.message) from exc
        logger.info("[write] uploaded file; location:%s;bytes:%d", location, len(contents))

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def delete(self, path: str) -> None:
        """Delete a single file.

        Raises:
            UnableToDeleteFile: If the file does not exist or the deletion fails.
        """
        location = self._prefixer.prefix_path(path)
        try:
            located = self._resolver.locate_file(location)
            if located is None:
                raise UnableToDeleteFile(location, FILE_NOT_FOUND)
            folder, file = located
            self._client.delete_file(folder.node, file.file_seq)
        except DirectCloudApiError as exc:
            raise UnableToDeleteFile(location, exc.message) from exc
        logger.info("[delete] deleted file; location:%s", location)

    def delete_directory(self, path: str) -> None:
        """Delete a directory together with everything below it.

        Raises:
            UnableToDeleteDirectory: If the directory does not exist, is the
                root folder, or the deletion fails.
        """
        location = self._prefixer.prefix_path(path)
        if not split_path(location):
            raise UnableToDeleteDirectory(location, "The root directory cannot be deleted.")
        try:
            folder = self._resolver.resolve_folder(location)
            if folder is None:
                raise UnableToDeleteDirectory(location, DIRECTORY_NOT_FOUND)
            self._client.delete_folder(folder.node)
        except DirectCloudApiError as exc:
            raise UnableToDeleteDirectory(location, exc.message) from exc
        logger.info("[delete_directory] deleted directory; location:%s", location)

    # ------------------------------------------------------------------
    # Directory creation
    # ------------------------------------------------------------------

    def create_directory(self, path: str, config: Mapping[str, Any] | None = None) -> None:
        """Create a directory and every missing ancestor.

        Existing directories are left untouched, so repeated calls do not
        create duplicates. A failure part-way leaves the already-created
        ancestors in place.

        Raises:
            UnableToCreateDirectory: If any remote folder creation fails.
        """
        self._create_directory_at(self._prefixer.prefix_path(path))

    def _create_directory_at(self, location: str) -> FolderRecord:
        """Create ``location`` (absolute) and its missing ancestors; return its record."""
        parts = split_path(location)
        try:
            # Deepest existing ancestor; depth 0 is the root, which always resolves.
            depth = len(parts)
            folder = self._resolver.resolve_folder(location)
            while folder is None:
                depth -= 1
                folder = self._resolver.resolve_folder(join_path(parts[:depth]))
            for name in parts[depth:]:
                response = self._client.create_folder(folder.node, name)
                node = response.get(FIELD_NODE)
                if not node:
                    raise UnableToCreateDirectory(location, "Create folder response has no node.")
                drive_path = join_path([*split_path(folder.drive_path), name])
                folder = FolderRecord(node=str(node), drive_path=drive_path)
                logger.info(
                    "[create_directory] created folder; path:%s;node:%s", folder.drive_path, node
                )
        except DirectCloudApiError as exc:
            raise UnableToCreateDirectory(location, exc.message) from exc
        return folder

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def set_visibility(self, path: str, visibility: str) -> None:
        raise UnableToSetVisibility(path, "Adapter does not support visibility controls.")

    def visibility(self, path: str) -> FileAttributes:
        # Noop: DirectCloud has no per-file visibility.
        return FileAttributes(path)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def mime_type(self, path: str) -> FileAttributes:
        """Return the MIME type guessed from the path; the remote service is not contacted."""
        mime_type = self._mime_type_detector.detect_mime_type_from_path(path)
        return FileAttributes(path, mime_type=mime_type)

    def last_modified(self, path: str) -> FileAttributes:
        info = self._file_info(self._prefixer.prefix_path(path), METADATA_LAST_MODIFIED)
        return FileAttributes(path, last_modified=parse_timestamp(info.get(FIELD_DATETIME)))

    def file_size(self, path: str) -> FileAttributes:
        info = self._file_info(self._prefixer.prefix_path(path), METADATA_FILE_SIZE)
        size = info.get(FIELD_SIZE)
        return FileAttributes(path, file_size=int(size) if size is not None else None)

    def _file_info(self, location: str, metadata_type: str) -> dict[str, Any]:
        try:
            located = self._resolver.locate_file(location)
            if located is None:
                raise UnableToRetrieveMetadata(location, metadata_type, FILE_NOT_FOUND)
            folder, file = located
            response = self._client.get_file_info(folder.node, file.file_seq)
        except DirectCloudApiError as exc:
            raise UnableToRetrieveMetadata(location, metadata_type, exc.message) from exc
        return response.get(RESPONSE_RESULT) or {}

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_contents(self, path: str = "", deep: bool = False) -> Iterator[StorageAttributes]:
        """Lazily list the entries below a directory.

        Paths in the yielded records are relative to the adapter prefix. With
        ``deep`` set, each sub-directory's contents are yielded before the
        sub-directory's own record; files of a level come after its folders.

        Raises:
            UnableToListContents: If the directory does not exist or a listing fails.
        """
        location = self._prefixer.prefix_path(path)
        try:
            folder = self._resolver.resolve_folder(location)
        except DirectCloudApiError as exc:
            raise UnableToListContents(location, deep, exc.message) from exc
        if folder is None:
            raise UnableToListContents(location, deep, DIRECTORY_NOT_FOUND)
        yield from self._walk(location, folder.node, deep, set())

    def _walk(
        self, location: str, node: str, deep: bool, visited: set[str]
    ) -> Iterator[StorageAttributes]:
        visited.add(node)
        listing = self._list_node(location, node, deep)
        for folder in listing.folders:
            if deep and folder.node not in visited:
                yield from self._walk(folder.drive_path, folder.node, deep, visited)
            yield DirectoryAttributes(
                self._prefixer.strip_prefix(folder.drive_path),
                last_modified=parse_timestamp(folder.datetime_at),
            )
        for file in listing.files:
            file_path = self._prefixer.strip_prefix(join_path([*split_path(location), file.name]))
            yield FileAttributes(
                file_path,
                file_size=file.size,
                last_modified=parse_timestamp(file.datetime_at),
                mime_type=self._mime_type_detector.detect_mime_type_from_path(file_path),
            )

    def _list_node(self, location: str, node: str, deep: bool) -> FolderListing:
        try:
            return self._resolver.list_folder(node)
        except DirectCloudApiError as exc:
            raise UnableToListContents(location, deep, exc.message) from exc

    # ------------------------------------------------------------------
    # Move, copy and sharing
    # ------------------------------------------------------------------

    def move(self, source: str, destination: str, config: Mapping[str, Any] | None = None) -> None:
        """Move a file, renaming it when the destination name differs.

        Raises:
            UnableToMoveFile: If the source is missing, the destination parent
                cannot be created, or a remote call fails.
        """
        src_location = self._prefixer.prefix_path(source)
        dst_location = self._prefixer.prefix_path(destination)
        try:
            located = self._resolver.locate_file(src_location)
            if located is None:
                raise UnableToMoveFile(src_location, dst_location, FILE_NOT_FOUND)
            if src_location == dst_location:
                return
            src_folder, file = located
            dst_folder = self._destination_folder(parent_path(dst_location))
            self._client.move_file(dst_folder.node, src_folder.node, file.file_seq)
            if file.name != base_name(dst_location):
                self._client.rename_file(dst_folder.node, file.file_seq, base_name(dst_location))
        except (DirectCloudApiError, UnableToCreateDirectory) as exc:
            raise UnableToMoveFile(src_location, dst_location, _reason(exc)) from exc
        logger.info("[move] moved file; source:%s;destination:%s", src_location, dst_location)

    def copy(self, source: str, destination: str, config: Mapping[str, Any] | None = None) -> None:
        """Copy a file, renaming the copy when the destination name differs.

        Raises:
            UnableToCopyFile: If the source is missing, the destination parent
                cannot be created, or a remote call fails.
        """
        src_location = self._prefixer.prefix_path(source)
        dst_location = self._prefixer.prefix_path(destination)
        try:
            located = self._resolver.locate_file(src_location)
            if located is None:
                raise UnableToCopyFile(src_location, dst_location, FILE_NOT_FOUND)
            if src_location == dst_location:
                return
            src_folder, file = located
            dst_folder = self._destination_folder(parent_path(dst_location))
            response = self._client.copy_file(dst_folder.node, src_folder.node, file.file_seq)
            if file.name != base_name(dst_location):
                new_file_seq = (response.get(RESPONSE_DATA) or {}).get(FIELD_NEW_FILE_SEQ)
                if new_file_seq is None:
                    raise UnableToCopyFile(
                        src_location, dst_location, "Copy response has no new file sequence."
                    )
                self._client.rename_file(dst_folder.node, new_file_seq, base_name(dst_location))
        except (DirectCloudApiError, UnableToCreateDirectory) as exc:
            raise UnableToCopyFile(src_location, dst_location, _reason(exc)) from exc
        logger.info("[copy] copied file; source:%s;destination:%s", src_location, dst_location)

    def public_url(self, path: str) -> str:
        """Create a DirectCloud share link for a file and return its URL.

        Raises:
            UnableToGeneratePublicUrl: If the file does not exist or the link cannot be created.
        """
        location = self._prefixer.prefix_path(path)
        try:
            located = self._resolver.locate_file(location)
            if located is None:
                raise UnableToGeneratePublicUrl(location, FILE_NOT_FOUND)
            folder, file = located
            response = self._client.create_share_link(folder.node, file.file_seq)
        except DirectCloudApiError as exc:
            raise UnableToGeneratePublicUrl(location, exc.message) from exc
        url = response.get(FIELD_URL) or (response.get(RESPONSE_DATA) or {}).get(FIELD_URL)
        if not url:
            raise UnableToGeneratePublicUrl(location, "Share link response has no url.")
        return str(url)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _destination_folder(self, location: str) -> FolderRecord:
        folder = self._resolver.resolve_folder(location)
        if folder is None:
            folder = self._create_directory_at(location)
        return folder


def _reason(exc: Exception) -> str:
    if isinstance(exc, DirectCloudApiError):
        return exc.message
    return getattr(exc, "reason", str(exc))


def adapter_from_config(client: DirectCloudClient, config: AdapterConfig) -> DirectCloudAdapter:
    """Construct a DirectCloudAdapter from adapter configuration.

    Args:
        client: DirectCloud client providing the remote primitives.
        config: Adapter configuration instance.

    Returns:
        Configured DirectCloudAdapter instance.
    """
    return DirectCloudAdapter(
        client=client,
        prefix=config.path_prefix,
        root_node=config.root_node,
        spool_max_bytes=config.spool_max_bytes,
    )
