"""Key-value JSON document storage.

Each key maps to one file ``<base_dir>/<key>.json`` holding raw JSON text.
Documents are read and overwritten whole; there is no partial update. The
favorites store is the only writer of its key.

File I/O is blocking; async callers go through ``aread``/``awrite``, which
run it with ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path


class JsonStorage:
    """Manages read/write of whole JSON documents by key."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base = Path(base_dir)

    def read(self, key: str) -> str | None:
        """Return the stored text for ``key``, or None if nothing was written yet."""
        full = self._resolve(key)
        if not full.exists():
            return None
        return full.read_text(encoding="utf-8")

    def write(self, key: str, text: str) -> Path:
        """Replace the document for ``key``.

        Writes to a sibling temp file and renames it over the target, so a
        crash mid-write never leaves a truncated document behind.

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(key)
        full.parent.mkdir(parents=True, exist_ok=True)
        tmp = full.with_suffix(full.suffix + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, full)
        return full

    def file_path(self, key: str) -> Path | None:
        """Return the absolute path of a stored document, or None if missing."""
        full = self._resolve(key)
        return full if full.exists() else None

    async def aread(self, key: str) -> str | None:
        return await asyncio.to_thread(self.read, key)

    async def awrite(self, key: str, text: str) -> Path:
        return await asyncio.to_thread(self.write, key, text)

    def _resolve(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            msg = f"Invalid storage key: {key!r}"
            raise ValueError(msg)
        full = self.base / f"{key}.json"
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Key escapes storage base directory: {key}"
            raise ValueError(msg) from None
        return full
