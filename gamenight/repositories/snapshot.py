# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository support: whole-document JSON snapshots on disk.
A snapshot without a path is a no-op, which keeps the store memory-only.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

from gamenight.core.logging import get_logger

logger = get_logger(__name__)


class JSONSnapshot:
    """Load-on-start / save-on-mutation file for one collection."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def load(self) -> dict[str, Any]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Snapshot unreadable, starting empty: path=%s, error=%s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Snapshot is not a JSON object, starting empty: path=%s", self._path)
            return {}
        return data

    def save(self, data: dict[str, Any]) -> None:
        """Write the whole document atomically (temp file + rename)."""
        if self._path is None:
            return
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
