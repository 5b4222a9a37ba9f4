"""
Layered code dictionary: common descriptions plus per-model overrides.

The dictionary is an explicit configuration object handed to the
translator. Its state lives in an immutable snapshot; merging builds a
new snapshot and swaps it in under a lock, so a translation running in
another thread always sees either the old or the new state in full.
"""
import json
import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from dialects.common_dialect import CommonDialect
from dialects.tsugami_dialect import model_overrides
from utils.errors import DictionaryExportError, DictionaryImportError

logger = logging.getLogger(__name__)

BASE_FIELD = "baseDict"
MODELS_FIELD = "modelDicts"
DEFAULT_EXPORT_FILENAME = "tsugami_dict.json"

_EMPTY: Mapping[str, str] = MappingProxyType({})


def _freeze(entries: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({code.upper(): text for code, text in entries.items()})


@dataclass(frozen=True)
class DictionarySnapshot:
    """Immutable state of a code dictionary at one point in time."""
    base: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    models: Mapping[str, Mapping[str, str]] = field(default_factory=lambda: MappingProxyType({}))

    def effective(self, model: Optional[str]) -> Mapping[str, str]:
        """Base entries overlaid by the entries of ``model`` (if known)."""
        overrides = self.models.get(model, _EMPTY) if model is not None else _EMPTY
        if not overrides:
            return self.base
        merged = dict(self.base)
        merged.update(overrides)
        return MappingProxyType(merged)


class CodeDictionary:
    """Thread-safe layered dictionary of code descriptions."""

    def __init__(self, base: Optional[Mapping[str, str]] = None,
                 models: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._lock = threading.Lock()
        self._snapshot = DictionarySnapshot(
            base=_freeze(base or {}),
            models=MappingProxyType({name: _freeze(entries) for name, entries in (models or {}).items()}),
        )

    @classmethod
    def default(cls) -> "CodeDictionary":
        """Dictionary seeded with the common codes and every known model."""
        return cls(CommonDialect().code_map, model_overrides())

    # Read access

    def snapshot(self) -> DictionarySnapshot:
        return self._snapshot

    def effective(self, model: Optional[str] = None) -> Mapping[str, str]:
        return self._snapshot.effective(model)

    def lookup(self, code: str, model: Optional[str] = None) -> Optional[str]:
        """Get the description for a code under a model, or None."""
        return self.effective(model).get(code.upper())

    def models(self) -> List[str]:
        return list(self._snapshot.models.keys())

    def has_model(self, model: str) -> bool:
        return model in self._snapshot.models

    # Merging

    def merge(self, base: Optional[Mapping[str, str]] = None,
              models: Optional[Mapping[str, Mapping[str, str]]] = None):
        """
        Merge entries additively.

        Imported keys overwrite existing ones; keys not mentioned are kept.
        Models not yet known are added.
        """
        with self._lock:
            current = self._snapshot
            new_base = dict(current.base)
            if base:
                new_base.update({code.upper(): text for code, text in base.items()})

            new_models = {name: entries for name, entries in current.models.items()}
            for name, entries in (models or {}).items():
                merged = dict(new_models.get(name, _EMPTY))
                merged.update({code.upper(): text for code, text in entries.items()})
                new_models[name] = MappingProxyType(merged)

            self._snapshot = DictionarySnapshot(MappingProxyType(new_base), MappingProxyType(new_models))

        logger.info("Merged %d base and %d model entries",
                    len(base or {}), sum(len(entries) for entries in (models or {}).values()))

    # Exchange format

    def export_document(self) -> Dict[str, Any]:
        """Current state as a ``{"baseDict": ..., "modelDicts": ...}`` document."""
        snapshot = self._snapshot
        return {
            BASE_FIELD: dict(snapshot.base),
            MODELS_FIELD: {name: dict(entries) for name, entries in snapshot.models.items()},
        }

    def export_json(self, indent: int = 2) -> str:
        return json.dumps(self.export_document(), ensure_ascii=False, indent=indent)

    def import_json(self, text: str, source: Optional[str] = None):
        """Parse a JSON dictionary document and merge it. Nothing changes on failure."""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise DictionaryImportError(str(e), source) from e
        self.import_document(document, source)

    def import_document(self, document: Any, source: Optional[str] = None):
        """Validate a parsed dictionary document in full, then merge it."""
        base, models = self._validate_document(document, source)
        self.merge(base, models)

    @staticmethod
    def _validate_document(document: Any, source: Optional[str] = None):
        if not isinstance(document, dict):
            raise DictionaryImportError("document must be a JSON object", source)

        base = document.get(BASE_FIELD)
        if base is None:
            base = {}
        if not isinstance(base, dict):
            raise DictionaryImportError(f"'{BASE_FIELD}' must be an object", source)
        for code, text in base.items():
            if not isinstance(text, str):
                raise DictionaryImportError(f"'{BASE_FIELD}.{code}' must be a string", source)

        models = document.get(MODELS_FIELD)
        if models is None:
            models = {}
        if not isinstance(models, dict):
            raise DictionaryImportError(f"'{MODELS_FIELD}' must be an object", source)
        for name, entries in models.items():
            if not isinstance(entries, dict):
                raise DictionaryImportError(f"'{MODELS_FIELD}.{name}' must be an object", source)
            for code, text in entries.items():
                if not isinstance(text, str):
                    raise DictionaryImportError(
                        f"'{MODELS_FIELD}.{name}.{code}' must be a string", source)

        return base, models

    # File helpers

    def save(self, filepath: str):
        """Write the dictionary document to a JSON file."""
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write(self.export_json())
        except OSError as e:
            raise DictionaryExportError(f"Could not write {filepath}: {e}") from e
        logger.info("Exported dictionary to %s", filepath)

    def load(self, filepath: str):
        """Read a JSON dictionary document from a file and merge it."""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DictionaryImportError(str(e), filepath) from e
        self.import_json(text, filepath)
        logger.info("Imported dictionary from %s", filepath)
