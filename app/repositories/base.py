"""Repository base class used by all concrete repositories."""
import json
import logging
import os
from typing import Any


class BaseRepository:
    """Provides read access to JSON data files kept in one directory.

    Sub-classes call :meth:`_load` with a file name relative to the
    repository directory.  Missing or corrupt files are logged and replaced
    by the supplied default so callers never have to handle I/O errors.
    """

    def __init__(self, directory: str) -> None:
        self._dir = directory
        self._log = logging.getLogger(f'freegames.repository.{type(self).__name__}')

    def _path(self, file_name: str) -> str:
        return os.path.join(self._dir, file_name)

    def _load(self, file_name: str, default: Any) -> Any:
        """Load JSON from *file_name*, returning *default* on missing/corrupt file."""
        path = self._path(file_name)
        if os.path.exists(path):
            try:
                with open(path, 'r', encoding='utf-8') as fh:
                    return json.load(fh)
            except (json.JSONDecodeError, IOError) as exc:
                self._log.warning("Could not load %s: %s", path, exc)
        return default
