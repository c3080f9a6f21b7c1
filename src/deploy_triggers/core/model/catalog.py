"""Catálogo de Resources indexado por endereço.

Mantém a ordem de registro e rejeita endereços duplicados, no mesmo
espírito de um registry: a validação acontece antes de qualquer avaliação.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .types import Resource


class DuplicateResourceError(ValueError):
    """Dois Resources registrados com o mesmo endereço."""


@dataclass
class ResourceCatalog:
    _resources: Dict[str, Resource] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def from_resources(cls, resources: Iterable[Resource]) -> "ResourceCatalog":
        catalog = cls()
        for r in resources:
            catalog.add(r)
        return catalog

    def add(self, resource: Resource) -> None:
        if resource.address in self._resources:
            raise DuplicateResourceError(f"Duplicate resource address: {resource.address}")
        self._resources[resource.address] = resource
        self._order.append(resource.address)

    def has(self, address: str) -> bool:
        return address in self._resources

    def get(self, address: str) -> Resource:
        return self._resources[address]

    def list(self) -> List[Resource]:
        return [self._resources[a] for a in self._order]

    def __len__(self) -> int:
        return len(self._order)
