# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class FakeStorage:
    """
    In-memory KeyValueStorage.

    Records every write so tests can assert on the persistence contract
    (full overwrite per mutation, no write on no-op).
    """

    items: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes.append((key, value))

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self.items))


class FakeClock:
    """Millisecond clock frozen at `now_ms` unless advanced."""

    def __init__(self, now_ms: int = 1_760_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms
