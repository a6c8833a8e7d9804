"""Pytest configuration: adds src/ to sys.path and provides an in-memory DirectCloud."""

import itertools
import os
import sys
from typing import Any

import pytest

# Add src/ to Python path so tests can import from directcloud_fs
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from directcloud_fs.adapter.directcloud import DirectCloudAdapter  # noqa: E402
from directcloud_fs.remote.client import DirectCloudApiError  # noqa: E402
from directcloud_fs.remote.models import ROOT_NODE  # noqa: E402

FAKE_DATETIME = "2024-03-01 12:30:00"


class FakeDirectCloud:
    """In-memory stand-in for a DirectCloud account, speaking the client contract.

    Records every call in ``calls`` as ``(method_name, args)`` tuples.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.folders: dict[str, dict[str, Any]] = {
            ROOT_NODE: {"drive_path": "/", "parent": None, "name": "", "dir_seq": 0},
        }
        self.files: dict[int, dict[str, Any]] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    # Helpers for arranging state -------------------------------------------------

    def add_folder(self, drive_path: str) -> str:
        """Create every folder along ``drive_path`` directly; return the deepest node."""
        node = ROOT_NODE
        for name in [p for p in drive_path.split("/") if p]:
            child = self._child_folder(node, name)
            node = child if child is not None else self._new_folder(node, name)
        return node

    def add_file(self, path: str, content: bytes) -> int:
        parent, _, name = path.rpartition("/")
        node = self.add_folder(parent)
        return self._new_file(node, name, content)

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def folder_paths(self) -> list[str]:
        return sorted(f["drive_path"] for f in self.folders.values())

    def file_paths(self) -> list[str]:
        paths = []
        for f in self.files.values():
            parent = self.folders[f["node"]]["drive_path"].rstrip("/")
            paths.append(f"{parent}/{f['name']}")
        return sorted(paths)

    # Client contract -------------------------------------------------------------

    def get_list(self, node: str) -> dict[str, Any]:
        self.calls.append(("get_list", (node,)))
        self._require_folder(node)
        folders = [
            {
                "node": child_node,
                "drive_path": child["drive_path"],
                "dir_seq": child["dir_seq"],
                "name": child["name"],
                "datetime_at": FAKE_DATETIME,
            }
            for child_node, child in self.folders.items()
            if child["parent"] == node
        ]
        files = [
            {
                "file_seq": seq,
                "name": f["name"],
                "size": len(f["content"]),
                "datetime_at": FAKE_DATETIME,
            }
            for seq, f in self.files.items()
            if f["node"] == node
        ]
        return {"success": True, "folders": folders, "files": files}

    def upload(self, node: str, contents: bytes, name: str) -> dict[str, Any]:
        self.calls.append(("upload", (node, contents, name)))
        self._require_folder(node)
        for seq, f in self.files.items():
            if f["node"] == node and f["name"] == name:
                f["content"] = contents
                return {"success": True, "file_seq": seq}
        return {"success": True, "file_seq": self._new_file(node, name, contents)}

    def download(self, file_seq: int) -> bytes:
        self.calls.append(("download", (file_seq,)))
        return self._require_file(file_seq)["content"]

    def delete_file(self, node: str, file_seq: int) -> dict[str, Any]:
        self.calls.append(("delete_file", (node, file_seq)))
        if self._require_file(file_seq)["node"] != node:
            raise DirectCloudApiError(400, "File is not in the given folder")
        del self.files[file_seq]
        return {"success": True}

    def delete_folder(self, node: str) -> dict[str, Any]:
        self.calls.append(("delete_folder", (node,)))
        self._require_folder(node)
        doomed = {node}
        changed = True
        while changed:
            children = {n for n, f in self.folders.items() if f["parent"] in doomed}
            changed = not children <= doomed
            doomed |= children
        for n in doomed:
            del self.folders[n]
        self.files = {s: f for s, f in self.files.items() if f["node"] not in doomed}
        return {"success": True}

    def create_folder(self, node: str, name: str) -> dict[str, Any]:
        self.calls.append(("create_folder", (node, name)))
        self._require_folder(node)
        if self._child_folder(node, name) is not None:
            raise DirectCloudApiError(400, "Folder already exists")
        return {"success": True, "node": self._new_folder(node, name)}

    def get_file_info(self, node: str, file_seq: int) -> dict[str, Any]:
        self.calls.append(("get_file_info", (node, file_seq)))
        f = self._require_file(file_seq)
        return {"success": True, "result": {"size": len(f["content"]), "datetime": FAKE_DATETIME}}

    def move_file(self, dst_node: str, src_node: str, file_seq: int) -> dict[str, Any]:
        self.calls.append(("move_file", (dst_node, src_node, file_seq)))
        self._require_folder(dst_node)
        self._require_file(file_seq)["node"] = dst_node
        return {"success": True}

    def copy_file(self, dst_node: str, src_node: str, file_seq: int) -> dict[str, Any]:
        self.calls.append(("copy_file", (dst_node, src_node, file_seq)))
        self._require_folder(dst_node)
        source = self._require_file(file_seq)
        new_seq = self._new_file(dst_node, source["name"], source["content"])
        return {"success": True, "data": {"new_file_seq": new_seq}}

    def rename_file(self, node: str, file_seq: int, name: str) -> dict[str, Any]:
        self.calls.append(("rename_file", (node, file_seq, name)))
        self._require_file(file_seq)["name"] = name
        return {"success": True}

    def create_share_link(self, node: str, file_seq: int) -> dict[str, Any]:
        self.calls.append(("create_share_link", (node, file_seq)))
        self._require_file(file_seq)
        return {"success": True, "url": f"https://directcloud.example/share/{file_seq}"}

    # Internals -------------------------------------------------------------------

    def _require_folder(self, node: str) -> dict[str, Any]:
        if node not in self.folders:
            raise DirectCloudApiError(400, f"Folder not found: {node}")
        return self.folders[node]

    def _require_file(self, file_seq: int) -> dict[str, Any]:
        if file_seq not in self.files:
            raise DirectCloudApiError(400, f"File not found: {file_seq}")
        return self.files[file_seq]

    def _child_folder(self, node: str, name: str) -> str | None:
        for child_node, child in self.folders.items():
            if child["parent"] == node and child["name"] == name:
                return child_node
        return None

    def _new_folder(self, parent: str, name: str) -> str:
        dir_seq = next(self._ids)
        node = f"{ROOT_NODE}{{{dir_seq}"
        parent_path = self.folders[parent]["drive_path"].rstrip("/")
        self.folders[node] = {
            "drive_path": f"{parent_path}/{name}",
            "parent": parent,
            "name": name,
            "dir_seq": dir_seq,
        }
        return node

    def _new_file(self, node: str, name: str, content: bytes) -> int:
        seq = next(self._ids)
        self.files[seq] = {"node": node, "name": name, "content": content}
        return seq


@pytest.fixture
def fake_directcloud() -> FakeDirectCloud:
    return FakeDirectCloud()


@pytest.fixture
def adapter(fake_directcloud: FakeDirectCloud) -> DirectCloudAdapter:
    return DirectCloudAdapter(fake_directcloud)
