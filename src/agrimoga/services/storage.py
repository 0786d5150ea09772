"""
Local persistence.

A best-effort key/value store of JSON blobs, one file per key, and the capped
advisory log built on top of it. Storage failures never propagate: the store
keeps the value in memory for the rest of the session instead.
"""

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core import constants
from ..models import AdvisoryLogEntry


class JSONStore:
    """Key/value store of JSON documents in a directory."""

    def __init__(self, directory: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the store.

        Args:
            directory: Directory holding one <key>.json file per key
            logger: Logger instance
        """
        self.directory = Path(directory)
        self.logger = logger or logging.getLogger(__name__)
        self._memory: Dict[str, Any] = {}

    def _path(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9._-]", "_", key)
        return self.directory / f"{safe}.json"

    def load(self, key: str, fallback: Any = None) -> Any:
        """
        Load a stored value.

        Returns:
            The stored value, or fallback when the key is missing, empty or
            holds malformed JSON
        """
        if key in self._memory:
            return copy.deepcopy(self._memory[key])

        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                value = json.load(f)
        except FileNotFoundError:
            return fallback
        except (OSError, ValueError) as e:
            self.logger.debug(f"Ignoring unreadable value for {key}: {e}")
            return fallback

        return fallback if value is None else value

    def save(self, key: str, value: Any) -> None:
        """Store a value; failures are logged and the value is kept in memory."""
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            payload = json.dumps(value, ensure_ascii=False)
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            self.logger.warning(f"Could not persist {key}, keeping it in memory: {e}")
            self._memory[key] = copy.deepcopy(value)
            return

        self._memory.pop(key, None)

    def delete(self, key: str) -> None:
        """Remove a stored value if present."""
        self._memory.pop(key, None)
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning(f"Could not delete {key}: {e}")


class AdvisoryLog:
    """Most-recent-first log of irrigation advice, capped at max_entries."""

    def __init__(
        self,
        store: JSONStore,
        key: str = constants.KEY_IRRIGATION_LOG,
        max_entries: int = constants.DEFAULT_LOG_MAX_ENTRIES,
        logger: Optional[logging.Logger] = None
    ):
        self.store = store
        self.key = key
        self.max_entries = max_entries
        self.logger = logger or logging.getLogger(__name__)

    def _raw(self) -> List[Dict[str, Any]]:
        raw = self.store.load(self.key, [])
        return raw if isinstance(raw, list) else []

    def append(self, entry: AdvisoryLogEntry) -> List[AdvisoryLogEntry]:
        """
        Record an entry at the head of the log, evicting the oldest beyond the cap.

        Returns:
            The retained entries, newest first
        """
        raw = self._raw()
        raw.insert(0, entry.to_dict())
        evicted = len(raw) - self.max_entries
        if evicted > 0:
            self.logger.debug(f"Evicting {evicted} oldest advisory log entries")
        raw = raw[:self.max_entries]
        self.store.save(self.key, raw)
        return self._parse(raw)

    def entries(self) -> List[AdvisoryLogEntry]:
        """Retained entries, newest first; malformed rows are skipped."""
        return self._parse(self._raw())

    def _parse(self, raw: List[Dict[str, Any]]) -> List[AdvisoryLogEntry]:
        entries = []
        for row in raw:
            try:
                entries.append(AdvisoryLogEntry.from_dict(row))
            except (KeyError, TypeError, ValueError) as e:
                self.logger.debug(f"Skipping malformed log entry: {e}")
        return entries

    def clear(self) -> None:
        self.store.save(self.key, [])
