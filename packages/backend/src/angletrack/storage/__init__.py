"""File-backed persistence.

Learn: Each store is a single JSON document holding an ordered array
of records. Every mutation loads the whole document, changes it in
memory and rewrites it. JsonFileStore is the only thing that touches
the filesystem, so swapping in an embedded database later means
replacing that one class.
"""

from angletrack.storage.json_file import JsonFileStore
from angletrack.storage.measurements import MeasurementStore
from angletrack.storage.users import UserStore

__all__ = ["JsonFileStore", "MeasurementStore", "UserStore"]
