"""Key-value snapshot stores used to persist a tournament.

The engine never knows the storage technology: a host hands the
:class:`~partnerpairing.tournament.Tournament` anything that satisfies
:class:`SnapshotStore` and the whole state travels as one JSON document.
"""

# Partner Pairing
# Copyright (C) 2025  Partner Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import re
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from partnerpairing.constants import SAVE_FILE_EXTENSION
from partnerpairing.exceptions import SnapshotLoadException, SnapshotSaveException
from partnerpairing.utils import setup_logger

logger = setup_logger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class SnapshotStore(Protocol):
    """Opaque key-value store for serialized tournament snapshots."""

    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> None: ...


class InMemorySnapshotStore:
    """Snapshot store kept in a dictionary, handy for tests and embedding."""

    def __init__(self) -> None:
        self._data: Dict[str, bytes] = {}

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileSnapshotStore:
    """Snapshot store writing one ``<key>.json`` file per key in a directory."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise SnapshotSaveException(f"Invalid snapshot key: {key!r}")
        return self.directory / f"{key}{SAVE_FILE_EXTENSION}"

    def get(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise SnapshotLoadException(f"Cannot read snapshot {path}: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(value)
            tmp_path.replace(path)
        except OSError as e:
            raise SnapshotSaveException(f"Cannot write snapshot {path}: {e}") from e
        logger.debug(f"Snapshot {key} written to {path}")
