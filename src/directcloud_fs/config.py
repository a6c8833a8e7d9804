"""Adapter configuration loaded from environment variables."""

import os
from dataclasses import dataclass

from directcloud_fs.remote.models import ROOT_NODE

DEFAULT_SPOOL_MAX_BYTES = 8 * 1024 * 1024


@dataclass(frozen=True)
class AdapterConfig:
    """Centralized adapter configuration.

    Credentials are not part of this configuration: they belong to the
    DirectCloud client the caller constructs and hands to the adapter.
    """

    path_prefix: str = ""
    root_node: str = ROOT_NODE
    spool_max_bytes: int = DEFAULT_SPOOL_MAX_BYTES


def load_config() -> AdapterConfig:
    """Construct an AdapterConfig from environment variables.

    Optional environment variables (with defaults):
        DIRECTCLOUD_PATH_PREFIX: Sub-tree of the account the adapter is confined to (default: "").
        DIRECTCLOUD_ROOT_NODE: Node token of the account root folder (default: "1{2").
        DIRECTCLOUD_SPOOL_MAX_BYTES: Bytes kept in memory by read_stream before
            spilling to disk (default: 8388608).

    Returns:
        Configured AdapterConfig instance.
    """
    return AdapterConfig(
        path_prefix=os.environ.get("DIRECTCLOUD_PATH_PREFIX", ""),
        root_node=os.environ.get("DIRECTCLOUD_ROOT_NODE", ROOT_NODE),
        spool_max_bytes=int(
            os.environ.get("DIRECTCLOUD_SPOOL_MAX_BYTES", str(DEFAULT_SPOOL_MAX_BYTES))
        ),
    )
