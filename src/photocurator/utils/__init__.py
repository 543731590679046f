"""Utility modules package.

This package provides record serialization, collection loading and
thread pool sizing.
"""

from photocurator.utils.concurrency import worker_count
from photocurator.utils.serialization import (
    PhotoCollection,
    to_dict,
    from_dict,
    parse_collection,
    load_collection,
    save_result,
)

__all__ = [
    'worker_count',
    'PhotoCollection',
    'to_dict',
    'from_dict',
    'parse_collection',
    'load_collection',
    'save_result',
]
