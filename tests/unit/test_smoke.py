"""Smoke tests: validate the package wires together end-to-end."""

import os
from unittest.mock import patch


def test_package_exposes_version() -> None:
    import directcloud_fs

    assert directcloud_fs.__version__ == "0.1.0"


def test_adapter_from_env_config_completes_round_trip(fake_directcloud) -> None:
    """An adapter built from environment config writes, lists and reads through the client."""
    from directcloud_fs import adapter_from_config, load_config

    with patch.dict(os.environ, {"DIRECTCLOUD_PATH_PREFIX": "smoke"}, clear=True):
        adapter = adapter_from_config(fake_directcloud, load_config())

    adapter.write("reports/q1.csv", b"a,b\n1,2\n")

    assert [e.path for e in adapter.list_contents("", deep=True)] == [
        "reports/q1.csv",
        "reports",
    ]
    assert adapter.read("reports/q1.csv") == b"a,b\n1,2\n"
    assert fake_directcloud.file_paths() == ["/smoke/reports/q1.csv"]
