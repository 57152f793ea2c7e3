# Core modules

from .config import settings, get_settings, Settings
from .exceptions import (
    StorefrontError,
    ValidationError,
    NotFoundError,
    InvalidQuantityError,
    RemoteStoreError,
    RemoteFetchError,
    RemoteWriteError,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "StorefrontError",
    "ValidationError",
    "NotFoundError",
    "InvalidQuantityError",
    "RemoteStoreError",
    "RemoteFetchError",
    "RemoteWriteError",
]
