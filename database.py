"""
JSON file-backed collection store

Each named collection lives in a single document `<DATA_DIR>/<name>.json` and
is always read and rewritten as a whole. Mutations should go through
`transaction()`, which holds a per-collection lock for the full
read-modify-write so two writers on the same collection cannot lose each
other's changes.
"""

import copy
import json
import logging
import os
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from bson import ObjectId

logger = logging.getLogger(__name__)

DATA_DIR = os.getenv("DATA_DIR", "data")


def new_id() -> str:
    return str(ObjectId())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def to_json(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


class _Locks:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def get(self, name: str) -> threading.RLock:
        with self._guard:
            if name not in self._locks:
                self._locks[name] = threading.RLock()
            return self._locks[name]


class BaseStore:
    """Shared locking and transaction logic; subclasses provide raw I/O."""

    def __init__(self):
        self._locks = _Locks()

    def _load(self, name: str) -> Optional[Any]:
        raise NotImplementedError

    def _dump(self, name: str, data: Any) -> None:
        raise NotImplementedError

    def exists(self, name: str) -> bool:
        raise NotImplementedError

    def names(self) -> List[str]:
        raise NotImplementedError

    def read(self, name: str, default: Any = None) -> Any:
        with self._locks.get(name):
            data = self._load(name)
        if data is None:
            return [] if default is None else copy.deepcopy(default)
        return data

    def write(self, name: str, data: Any) -> None:
        with self._locks.get(name):
            self._dump(name, to_json(data))

    @contextmanager
    def transaction(self, name: str, default: Any = None) -> Iterator[Any]:
        """Lock `name`, yield its current value and persist it on clean exit.

        The yielded object may be mutated in place. To replace it wholesale,
        mutate it in place as well (e.g. `items[:] = ...`).
        """
        with self._locks.get(name):
            data = self.read(name, default)
            yield data
            self._dump(name, to_json(data))


class CollectionStore(BaseStore):
    def __init__(self, data_dir: str = DATA_DIR):
        super().__init__()
        self.data_dir = data_dir

    def path(self, name: str) -> str:
        return os.path.join(self.data_dir, f"{name}.json")

    def exists(self, name: str) -> bool:
        return os.path.exists(self.path(name))

    def names(self) -> List[str]:
        if not os.path.isdir(self.data_dir):
            return []
        return sorted(f[:-5] for f in os.listdir(self.data_dir) if f.endswith(".json"))

    def _load(self, name: str) -> Optional[Any]:
        path = self.path(name)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _dump(self, name: str, data: Any) -> None:
        os.makedirs(self.data_dir, exist_ok=True)
        path = self.path(name)
        tmp = path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)
        logger.debug("Wrote collection %s", name)


class MemoryStore(BaseStore):
    """Same interface as CollectionStore, kept entirely in memory."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        super().__init__()
        self._data: Dict[str, Any] = {}
        for name, data in (initial or {}).items():
            self._data[name] = json.loads(json.dumps(to_json(data)))

    def exists(self, name: str) -> bool:
        return name in self._data

    def names(self) -> List[str]:
        return sorted(self._data)

    def _load(self, name: str) -> Optional[Any]:
        if name not in self._data:
            return None
        return copy.deepcopy(self._data[name])

    def _dump(self, name: str, data: Any) -> None:
        self._data[name] = copy.deepcopy(data)
