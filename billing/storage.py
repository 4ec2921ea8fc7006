"""Keyed persistence for the live bill.

Stores are plain key/value capabilities: ``load`` returns the supplied
default when a key is absent, so first runs need no special handling.
"""

import json
import logging
import os
import tempfile
from copy import deepcopy
from typing import Any

logger = logging.getLogger(__name__)


class MemoryStore:
    """Store kept in a dict, mostly for tests."""

    def __init__(self, initial: dict = None):
        self._data = deepcopy(initial) if initial else {}

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = deepcopy(value)


class JsonFileStore:
    """Store kept as one JSON object in a file.

    Every save rewrites the whole file through a temporary file and
    ``os.replace``, so readers never see a partially written store.
    """

    def __init__(self, path: str):
        self.path = path

    def load(self, key: str, default: Any = None) -> Any:
        data = self._read()
        if key not in data:
            logger.debug(f"Key '{key}' not in {self.path}, using default")
            return default
        return data[key]

    def save(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug(f"Saved key '{key}' to {self.path}")

    def _read(self) -> dict:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable store {self.path}: {str(e)}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store {self.path}: not a JSON object")
            return {}
        return data

    def _write(self, data: dict) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
