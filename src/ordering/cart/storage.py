"""Key-value storage backends for cart slots.

A storage holds string values under string keys, the way a browser's local
storage does. Every write is broadcast to the storage's watchers so that other
cart stores sharing the same storage (another tab) can react to it.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

StorageListener = Callable[[str, str | None, str | None], None]


class KeyValueStorage(ABC):
    """Abstract keyed slot storage with change notification."""

    def __init__(self) -> None:
        self._watchers: list[StorageListener] = []

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def _write(self, key: str, value: str | None) -> None: ...

    def set(self, key: str, value: str) -> None:
        old_value = self.get(key)
        self._write(key, value)
        self._notify(key, old_value, value)

    def remove(self, key: str) -> None:
        old_value = self.get(key)
        if old_value is None:
            return
        self._write(key, None)
        self._notify(key, old_value, None)

    def watch(self, listener: StorageListener) -> Callable[[], None]:
        """Register a listener called with ``(key, old_value, new_value)``.

        Returns a callable that removes the listener.
        """
        self._watchers.append(listener)

        def unwatch() -> None:
            if listener in self._watchers:
                self._watchers.remove(listener)

        return unwatch

    def _notify(self, key: str, old_value: str | None, new_value: str | None) -> None:
        for listener in list(self._watchers):
            try:
                listener(key, old_value, new_value)
            except Exception:
                logger.exception("Storage listener failed", key=key)


class InMemoryStorage(KeyValueStorage):
    def __init__(self) -> None:
        super().__init__()
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def _write(self, key: str, value: str | None) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStorage(KeyValueStorage):
    """Durable storage kept as a single JSON object on disk."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        text = self.path.read_text(encoding="utf-8").strip()
        if not text:
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Storage file is not valid JSON, starting empty", path=str(self.path))
            return {}

        if not isinstance(data, dict):
            logger.warning("Storage file does not hold an object, starting empty", path=str(self.path))
            return {}
        return data

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def _write(self, key: str, value: str | None) -> None:
        data = self._read_all()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
