"""Filesystem adapter for the DirectCloud storage service."""

from directcloud_fs.adapter.directcloud import DirectCloudAdapter, adapter_from_config
from directcloud_fs.config import AdapterConfig, load_config
from directcloud_fs.remote.client import DirectCloudApiError, DirectCloudClient

__version__ = "0.1.0"

__all__ = [
    "AdapterConfig",
    "DirectCloudAdapter",
    "DirectCloudApiError",
    "DirectCloudClient",
    "__version__",
    "adapter_from_config",
    "load_config",
]
