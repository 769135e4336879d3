"""
Storage port for flowchart graphs.

The converter never persists anything on its own. A canvas or application
layer that wants to keep the working graph between sessions calls a store
explicitly with a Graph value.

Classes:
    GraphStore: Abstract save/load interface.
    MemoryGraphStore: Keeps the last saved graph in memory.
    JsonFileStore: Keeps graphs in a JSON document under a key.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import StorageError
from .models import Graph

DEFAULT_KEY = "flowchart-state"


class GraphStore(ABC):
    """Save/load interface used by the persistence collaborator."""

    @abstractmethod
    def save(self, graph: Graph) -> None:
        """Persist a graph, replacing any previously saved one."""

    @abstractmethod
    def load(self) -> Optional[Graph]:
        """Return the saved graph, or None if nothing was saved."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the saved graph."""


class MemoryGraphStore(GraphStore):
    """In-memory store. Saved graphs are copied through their dict form."""

    def __init__(self):
        self._data: Optional[Dict[str, Any]] = None

    def save(self, graph: Graph) -> None:
        self._data = graph.to_dict()

    def load(self) -> Optional[Graph]:
        if self._data is None:
            return None
        return Graph.from_dict(self._data)

    def clear(self) -> None:
        self._data = None


class JsonFileStore(GraphStore):
    """
    Stores graphs in a JSON file, one entry per key.

    Other keys already present in the file are preserved on save.

    Attributes:
        path: Location of the JSON document.
        key: Entry under which the graph is kept.
    """

    def __init__(self, path: Union[str, Path], key: str = DEFAULT_KEY):
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read graph store {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise StorageError(f"Graph store {self.path} is not a JSON object")
        return document

    def _write_document(self, document: Dict[str, Any]) -> None:
        try:
            self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write graph store {self.path}: {e}") from e

    def save(self, graph: Graph) -> None:
        document = self._read_document()
        document[self.key] = graph.to_dict()
        self._write_document(document)

    def load(self) -> Optional[Graph]:
        entry = self._read_document().get(self.key)
        if entry is None:
            return None
        try:
            return Graph.from_dict(entry)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StorageError(f"Corrupt graph entry '{self.key}': {e}") from e

    def clear(self) -> None:
        document = self._read_document()
        if document.pop(self.key, None) is not None:
            self._write_document(document)
