from __future__ import annotations

from abc import ABC, abstractmethod
import os
from pathlib import Path
import tempfile
import threading

from loguru import logger
from pydantic import ValidationError

from hexlayout.exceptions import StorageError
from hexlayout.layout.models import PositionState
from hexlayout.utils import json

# ------------------------------- Interface -------------------------------


class PositionStore(ABC):
    """Persistence for :class:`PositionState`, keyed by namespace."""

    @abstractmethod
    def load(self, namespace: str) -> PositionState: ...

    # Returns an empty state for unknown namespaces.

    @abstractmethod
    def save(self, namespace: str, state: PositionState) -> None: ...

    @abstractmethod
    def delete(self, namespace: str) -> bool: ...

    # Returns True if the namespace existed.

    @abstractmethod
    def namespaces(self) -> list[str]: ...


class MemoryPositionStore(PositionStore):
    """Dict-backed store for tests and ephemeral sessions."""

    def __init__(self) -> None:
        self._data: dict[str, PositionState] = {}
        self._lock = threading.Lock()

    def load(self, namespace: str) -> PositionState:
        with self._lock:
            state = self._data.get(namespace)
            if state is None:
                return PositionState(namespace=namespace)
            return state.model_copy(deep=True)

    def save(self, namespace: str, state: PositionState) -> None:
        with self._lock:
            self._data[namespace] = state.model_copy(
                update={"namespace": namespace}, deep=True
            )

    def delete(self, namespace: str) -> bool:
        with self._lock:
            return self._data.pop(namespace, None) is not None

    def namespaces(self) -> list[str]:
        with self._lock:
            return sorted(self._data)


class JsonFilePositionStore(PositionStore):
    """
    Single JSON document holding every namespace:
      {"<namespace>": {"namespace": ..., "indices": {key: index}, "updated_at": ...}}

    Writes go to a temp file that replaces the document atomically, and are
    serialized by a lock, so concurrent commits resolve last-writer-wins.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    # -------- small helpers --------

    def _read_all(self) -> dict[str, dict]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_bytes())
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read positions from {self.path}: {e}") from e
        if not isinstance(raw, dict):
            raise StorageError(
                f"Position file {self.path} must hold an object, got {type(raw).__name__}"
            )
        return raw

    def _write_all(self, documents: dict[str, dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(documents, indent=True))
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Failed to write positions to {self.path}: {e}") from e

    # -------- PositionStore --------

    def load(self, namespace: str) -> PositionState:
        with self._lock:
            document = self._read_all().get(namespace)
        if document is None:
            return PositionState(namespace=namespace)
        try:
            return PositionState.model_validate(document)
        except ValidationError as e:
            raise StorageError(
                f"Corrupt position state for namespace '{namespace}' in {self.path}"
            ) from e

    def save(self, namespace: str, state: PositionState) -> None:
        with self._lock:
            documents = self._read_all()
            documents[namespace] = state.model_copy(
                update={"namespace": namespace}
            ).model_dump(mode="json")
            self._write_all(documents)
        logger.debug(
            "[Positions] saved {} indices to {} ({})",
            len(state.indices),
            self.path,
            namespace,
        )

    def delete(self, namespace: str) -> bool:
        with self._lock:
            documents = self._read_all()
            if namespace not in documents:
                return False
            del documents[namespace]
            self._write_all(documents)
        logger.debug("[Positions] deleted namespace {} from {}", namespace, self.path)
        return True

    def namespaces(self) -> list[str]:
        with self._lock:
            return sorted(self._read_all())
