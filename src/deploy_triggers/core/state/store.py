"""Persistência canônica de fingerprints por recurso derivado (v1).

O fingerprint da última materialização de cada recurso derivado vive em
um state store externo, indexado pelo id do recurso. Nenhum estado é
mantido em variáveis de módulo.

Decisões (v1):
- Formato: JSON determinístico (`sort_keys`, indentação 2, UTF-8)
- Documento: {"version": 1, "resources": {<id>: <StateEntry>}}
- Escrita atômica: arquivo temporário no mesmo diretório + `os.replace`
- Arquivo ausente = estado vazio (primeira materialização, não é erro)
- Caminho padrão vem de `state.path` (ver `JsonFileStateStore.from_settings`)

Limites explícitos:
- Sem lock entre processos
- Não decide recriação (ver `core.evaluator`)
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Union

from deploy_triggers.core.errors import state_corrupted
from deploy_triggers.core.model.types import Fingerprint

if TYPE_CHECKING:
    from deploy_triggers.core.config.settings import Settings


STATE_VERSION = 1


class StateError(Exception):
    """Erro base do state store."""


class StateCorruptedError(StateError):
    """Arquivo de estado ilegível ou com estrutura inválida."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        super().__init__(f"corrupted state file {path}: {reason}")
        self.path = str(path)
        self.reason = reason

    def to_payload(self):
        return state_corrupted(path=self.path, reason=self.reason)


@dataclass(frozen=True)
class StateEntry:
    """Registro persistido da última materialização de um recurso derivado."""

    fingerprint: Fingerprint
    generation: int = 1
    materialized_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fingerprint": str(self.fingerprint),
            "generation": self.generation,
            "materialized_at": self.materialized_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StateEntry":
        generation = data.get("generation", 1)
        if not isinstance(generation, int) or isinstance(generation, bool) or generation < 1:
            raise ValueError(f"invalid generation: {generation!r}")
        return cls(
            fingerprint=Fingerprint.parse(data.get("fingerprint")),
            generation=generation,
            materialized_at=str(data.get("materialized_at", "")),
        )

    @classmethod
    def first(cls, fingerprint: Fingerprint, at: datetime) -> "StateEntry":
        return cls(fingerprint=fingerprint, generation=1, materialized_at=_iso(at))

    def next(self, fingerprint: Fingerprint, at: datetime) -> "StateEntry":
        return StateEntry(fingerprint=fingerprint, generation=self.generation + 1, materialized_at=_iso(at))


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


class StateStore(Protocol):
    """Contrato mínimo de um state store de fingerprints."""

    def get(self, resource_id: str) -> Optional[StateEntry]: ...

    def put(self, resource_id: str, entry: StateEntry) -> None: ...

    def delete(self, resource_id: str) -> bool: ...

    def ids(self) -> List[str]: ...


class InMemoryStateStore:
    """Store por instância, para testes e dry runs."""

    def __init__(self, entries: Optional[Dict[str, StateEntry]] = None) -> None:
        self._entries: Dict[str, StateEntry] = dict(entries or {})

    def get(self, resource_id: str) -> Optional[StateEntry]:
        return self._entries.get(resource_id)

    def put(self, resource_id: str, entry: StateEntry) -> None:
        self._entries[resource_id] = entry

    def delete(self, resource_id: str) -> bool:
        return self._entries.pop(resource_id, None) is not None

    def ids(self) -> List[str]:
        return sorted(self._entries)


class JsonFileStateStore:
    """Store canônica (v1) em arquivo JSON."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    @classmethod
    def from_settings(
        cls, settings: "Settings", *, base_dir: Optional[Union[str, Path]] = None
    ) -> "JsonFileStateStore":
        """
        Abre a store em `settings.state_path` (chave `state.path`).

        Caminhos relativos são resolvidos a partir de `base_dir`, ou do
        diretório corrente quando omitido.
        """
        path = Path(settings.state_path)
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        return cls(path)

    # ------------------------------------------------------------------
    # Leitura / escrita do documento
    # ------------------------------------------------------------------
    def _read(self) -> Dict[str, StateEntry]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StateCorruptedError(self.path, f"unreadable JSON ({e})") from e

        if not isinstance(data, dict):
            raise StateCorruptedError(self.path, "root must be an object")
        if data.get("version") != STATE_VERSION:
            raise StateCorruptedError(self.path, f"unsupported state version: {data.get('version')!r}")

        resources = data.get("resources")
        if not isinstance(resources, dict):
            raise StateCorruptedError(self.path, "'resources' must be an object")

        entries: Dict[str, StateEntry] = {}
        for rid, raw in resources.items():
            if not isinstance(raw, dict):
                raise StateCorruptedError(self.path, f"entry '{rid}' must be an object")
            try:
                entries[rid] = StateEntry.from_dict(raw)
            except ValueError as e:
                raise StateCorruptedError(self.path, f"entry '{rid}': {e}") from e
        return entries

    def _write(self, entries: Dict[str, StateEntry]) -> None:
        doc = {
            "version": STATE_VERSION,
            "resources": {rid: entries[rid].to_dict() for rid in sorted(entries)},
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".state-", suffix=".json", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, sort_keys=True, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    # ------------------------------------------------------------------
    # StateStore
    # ------------------------------------------------------------------
    def get(self, resource_id: str) -> Optional[StateEntry]:
        return self._read().get(resource_id)

    def put(self, resource_id: str, entry: StateEntry) -> None:
        entries = self._read()
        entries[resource_id] = entry
        self._write(entries)

    def delete(self, resource_id: str) -> bool:
        entries = self._read()
        if resource_id not in entries:
            return False
        del entries[resource_id]
        self._write(entries)
        return True

    def ids(self) -> List[str]:
        return sorted(self._read())


__all__ = [
    "STATE_VERSION",
    "InMemoryStateStore",
    "JsonFileStateStore",
    "StateCorruptedError",
    "StateEntry",
    "StateError",
    "StateStore",
]
