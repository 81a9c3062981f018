"""Eclipse WTP descriptor generation from resolved build graphs."""

from wtpsync.pipeline import SyncResult, generate_descriptors, sync

__all__ = [
    "SyncResult",
    "generate_descriptors",
    "sync",
]
