"""Service layer."""

from pubtrack.services.status_style import StatusStyle, resolve_status_style
from pubtrack.services.sync_service import SyncService

__all__ = [
    "StatusStyle",
    "SyncService",
    "resolve_status_style",
]
