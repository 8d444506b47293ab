# Storage collaborators

from .base import KeyValueStorage
from .memory import MemoryStorage
from .file import FileStorage

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
]
