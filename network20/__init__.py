"""Network20 data layer: work-card profiles and job listings.

Profiles are stored in Supabase when it is configured and in device-local
key-value storage otherwise, behind one `Store` API.
"""

from network20.core.config import Settings, get_settings
from network20.core.errors import (
    AuthenticationError,
    BackendError,
    BackendNotConfiguredError,
    Network20Error,
    ValidationError,
)
from network20.services.store import Store, create_store

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "BackendError",
    "BackendNotConfiguredError",
    "Network20Error",
    "Settings",
    "Store",
    "ValidationError",
    "create_store",
    "get_settings",
]
