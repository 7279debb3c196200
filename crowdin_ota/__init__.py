"""Python client for Crowdin Over-The-Air content delivery."""

from collections.abc import Mapping
from typing import Any

from crowdin_ota.client import FileTranslation, OtaClient
from crowdin_ota.config import ClientOptions, settings
from crowdin_ota.http import OtaHttpError
from crowdin_ota.schemas import Manifest

__version__ = "1.0.0"  # major.minor.patch
VERSION_NUM = 10000  # __version__ packed as MMmmpp: 1.2.3 -> 10203

__all__ = [
    "ClientOptions",
    "FileTranslation",
    "Manifest",
    "OtaClient",
    "OtaHttpError",
    "VERSION_NUM",
    "new",
    "settings",
]


def new(hash: str, options: ClientOptions | Mapping[str, Any] | None = None, **kwargs: Any) -> OtaClient:
    """Return a new client for the distribution ``hash``."""
    return OtaClient(hash, options, **kwargs)
