# src/daytasks/storage/local_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    File-backed key-value slots.

    On disk this is a single JSON object mapping string keys to string values.
    Every write rewrites the whole file (temp file + os.replace), so a crash
    mid-write leaves the previous version intact.

    Reads are forgiving: a missing, unreadable or non-object file reads as empty.
    """

    def __init__(self, path: str | Path = "local_storage.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("LocalStorage ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable storage file %s; treating as empty.", self._path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s is not a JSON object; treating as empty.", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    # ---- public API ----

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug("Stored key=%s bytes=%d", key, len(value))

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is None:
            return
        self._write_all(data)
        logger.debug("Removed key=%s", key)

    def keys(self) -> Iterator[str]:
        return iter(list(self._read_all()))
