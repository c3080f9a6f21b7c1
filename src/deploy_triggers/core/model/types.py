# src/deploy_triggers/core/model/types.py
"""
Tipos canônicos do modelo de dados do deploy-triggers.

Este módulo define as estruturas sobre as quais o avaliador opera:

    - Resource: entidade com identificador estável e atributos
    - ResourceRef / DerivedRef: referências resolvidas em tempo de avaliação
    - TimestampSource / UuidSource: fontes voláteis (hazard de configuração)
    - DependencySet: coleção ordenada de valores de dependência
    - Fingerprint: digest determinístico de um DependencySet
    - DerivedResource: recurso cuja materialização é controlada por fingerprint
    - Action / Evaluation: decisão produzida pelo avaliador

Decisões arquiteturais:
    - Todos os tipos são imutáveis (frozen dataclasses ou enums)
    - A ordem dos valores de um DependencySet é significativa
    - Fontes voláteis não são valores: são resolvidas a cada avaliação

Limites explícitos:
    - Não serializa nem calcula digests (ver `core.fingerprint`)
    - Não acessa o state store
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple


Clock = Callable[[], datetime]

# algoritmo -> tamanho do digest hexadecimal
DIGEST_LENGTHS: Dict[str, int] = {
    "sha1": 40,
    "sha256": 64,
    "sha512": 128,
}
SUPPORTED_ALGORITHMS = frozenset(DIGEST_LENGTHS)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Resource:
    """Recurso de infraestrutura com endereço estável e atributos de configuração."""

    address: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.address, str) or not self.address.strip():
            raise ValueError("resource.address must be a non-empty string")

    def attribute(self, name: str) -> Any:
        if name not in self.attributes:
            raise KeyError(name)
        return self.attributes[name]

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "attributes": dict(self.attributes)}


@dataclass(frozen=True)
class ResourceRef:
    """
    Referência a um Resource do catálogo.

    Com `attribute=None` a referência resolve para o mapa completo de
    atributos do recurso; caso contrário, para o valor do atributo.
    """

    address: str
    attribute: Optional[str] = None

    def __str__(self) -> str:
        if self.attribute is None:
            return self.address
        return f"{self.address}.{self.attribute}"


@dataclass(frozen=True)
class DerivedRef:
    """Referência ao fingerprint de outro DerivedResource do mesmo passe."""

    derived_id: str

    def __str__(self) -> str:
        return f"derived:{self.derived_id}"


class VolatileSource:
    """
    Fonte de valor que muda a cada avaliação.

    Usar uma fonte volátil como dependência faz o fingerprint mudar em
    todo passe de planejamento, sinalizando "recreate" sempre. O avaliador
    trata isso como hazard de configuração.
    """

    name = "volatile"

    def resolve(self, clock: Clock) -> Any:  # pragma: no cover - interface
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class TimestampSource(VolatileSource):
    """Horário corrente (equivalente a `timestamp()` em um trigger)."""

    name = "timestamp"

    def resolve(self, clock: Clock) -> Any:
        now = clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(timezone.utc).isoformat()


class UuidSource(VolatileSource):
    """UUID aleatório (equivalente a `uuid()` em um trigger)."""

    name = "uuid"

    def resolve(self, clock: Clock) -> Any:
        return uuid.uuid4().hex


VOLATILE_SOURCES: Dict[str, type] = {
    TimestampSource.name: TimestampSource,
    UuidSource.name: UuidSource,
}


@dataclass(frozen=True)
class DependencySet:
    """Coleção ordenada e imutável de valores de dependência."""

    values: Tuple[Any, ...] = ()

    @classmethod
    def of(cls, *values: Any) -> "DependencySet":
        return cls(values=tuple(values))

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def replace(self, index: int, value: Any) -> "DependencySet":
        items = list(self.values)
        items[index] = value
        return DependencySet(values=tuple(items))


@dataclass(frozen=True)
class Fingerprint:
    """Digest determinístico de um DependencySet, renderizado como `<alg>:<hex>`."""

    algorithm: str
    digest: str

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.digest}"

    @classmethod
    def parse(cls, text: str) -> "Fingerprint":
        if not isinstance(text, str) or ":" not in text:
            raise ValueError(f"invalid fingerprint: {text!r}")
        algorithm, digest = text.split(":", 1)
        expected = DIGEST_LENGTHS.get(algorithm)
        if expected is None:
            raise ValueError(f"unsupported fingerprint algorithm: {algorithm}")
        if len(digest) != expected or any(c not in "0123456789abcdef" for c in digest):
            raise ValueError(f"invalid {algorithm} digest: {digest!r}")
        return cls(algorithm=algorithm, digest=digest)


@dataclass(frozen=True)
class DerivedResource:
    """
    Recurso derivado cuja materialização é controlada por fingerprint.

    Ex.: um deployment cujos triggers são os ids de resources, methods e
    integrations; ou um stage que depende do deployment.
    """

    id: str
    triggers: DependencySet = field(default_factory=DependencySet)
    kind: str = "deployment"
    depends_on: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("derived.id must be a non-empty string")


class Action(str, Enum):
    """Decisão do avaliador para um DerivedResource."""

    CREATE = "create"
    RECREATE = "recreate"
    NOOP = "noop"


@dataclass(frozen=True)
class Hazard:
    """Problema de configuração detectado em um DependencySet."""

    code: str
    message: str
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "index": self.index}


@dataclass(frozen=True)
class Evaluation:
    """Resultado de uma avaliação: decisão mais o fingerprint a persistir."""

    resource_id: str
    action: Action
    fingerprint: Fingerprint
    previous: Optional[Fingerprint] = None
    hazards: Tuple[Hazard, ...] = ()

    @property
    def recreate(self) -> bool:
        return self.action is not Action.NOOP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resource_id": self.resource_id,
            "action": self.action.value,
            "fingerprint": str(self.fingerprint),
            "previous": str(self.previous) if self.previous is not None else None,
            "hazards": [h.to_dict() for h in self.hazards],
        }
