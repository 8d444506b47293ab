"""Key-value storage collaborator"""

from typing import Optional, Protocol


class KeyValueStorage(Protocol):
    """
    Opaque string key-value store.

    Mirrors browser local storage: values are strings, a missing key reads
    as None. Implementations may raise on any call (quota exceeded, disk
    unavailable); callers decide whether that is fatal.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
