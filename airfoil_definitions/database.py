"""
Name -> file lookup over a directory of ``.dat`` coordinate files.

The directory is scanned on first lookup (never at import time) and the
result cached until refresh() is called.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from airfoil_definitions.definitions import AirfoilFile

logger = logging.getLogger(__name__)


class AirfoilDatabase:
    """
    Read-only mapping from airfoil name (file stem) to AirfoilFile.

    Example
    -------
        db = AirfoilDatabase("data/airfoils/uiuc")
        coords = coordinates(db["naca2412"])
    """

    PATTERN = "*.dat"

    def __init__(self, directory):
        self.directory = Path(directory)
        self._lock = threading.Lock()
        self._entries: Optional[Dict[str, AirfoilFile]] = None

    def _scan(self) -> Dict[str, AirfoilFile]:
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Airfoil database directory not found: {self.directory}")

        entries = {
            path.stem: AirfoilFile(path)
            for path in sorted(self.directory.glob(self.PATTERN))
            if path.is_file()
        }
        logger.info("Indexed %d airfoils in %s", len(entries), self.directory)
        return entries

    def _load(self) -> Dict[str, AirfoilFile]:
        with self._lock:
            if self._entries is None:
                self._entries = self._scan()
            return self._entries

    def refresh(self) -> None:
        """Forget the cached index; the next lookup rescans the directory."""
        with self._lock:
            self._entries = None

    @property
    def loaded(self) -> bool:
        return self._entries is not None

    def names(self) -> List[str]:
        return list(self._load())

    def get(self, name: str, default=None) -> Optional[AirfoilFile]:
        return self._load().get(name, default)

    def __getitem__(self, name: str) -> AirfoilFile:
        entries = self._load()
        try:
            return entries[name]
        except KeyError:
            raise KeyError(f"Unknown airfoil '{name}' in {self.directory}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._load()

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._load())
