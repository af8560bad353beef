# src/daytasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps the storage backend swappable and makes testing easier.
"""

from collections.abc import Callable, Iterable
from typing import Any, Protocol


class KeyValueStorage(Protocol):
    """
    Durable string slots addressed by a fixed key (browser localStorage shape).

    Readers must tolerate missing keys (None). Writers overwrite the whole slot.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
    def keys(self) -> Iterable[str]: ...


# Called with the committed task snapshot after every store mutation.
TaskListener = Callable[[tuple[Any, ...]], None]
