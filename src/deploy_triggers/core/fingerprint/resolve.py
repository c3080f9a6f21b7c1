"""Resolução de referências e fontes voláteis de um DependencySet.

Antes do digest, cada valor do DependencySet é substituído pelo valor
concreto que representa:

- ResourceRef  → atributo (ou mapa de atributos) do Resource no catálogo
- DerivedRef   → fingerprint calculado no mesmo passe para o recurso derivado
- VolatileSource → valor produzido agora (relógio, UUID)

Listas, tuplas e mapas são percorridos recursivamente. A ordem é preservada.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from typing import Any, Mapping, Optional, Tuple

from deploy_triggers.core.model.catalog import ResourceCatalog
from deploy_triggers.core.model.types import (
    Clock,
    DependencySet,
    DerivedRef,
    Fingerprint,
    ResourceRef,
    VolatileSource,
    utc_now,
)

from .errors import UnresolvedReferenceError


def _resolve(
    value: Any,
    *,
    catalog: Optional[ResourceCatalog],
    derived: Mapping[str, Fingerprint],
    clock: Clock,
    resource_id: Optional[str],
) -> Any:
    if isinstance(value, ResourceRef):
        if catalog is None or not catalog.has(value.address):
            raise UnresolvedReferenceError(str(value), resource_id=resource_id)
        resource = catalog.get(value.address)
        if value.attribute is None:
            return dict(resource.attributes)
        if value.attribute not in resource.attributes:
            raise UnresolvedReferenceError(str(value), resource_id=resource_id)
        return resource.attributes[value.attribute]

    if isinstance(value, DerivedRef):
        if value.derived_id not in derived:
            raise UnresolvedReferenceError(str(value), resource_id=resource_id)
        return derived[value.derived_id]

    if isinstance(value, VolatileSource):
        return value.resolve(clock)

    kw = dict(catalog=catalog, derived=derived, clock=clock, resource_id=resource_id)

    if isinstance(value, (list, tuple)):
        return [_resolve(item, **kw) for item in value]

    if isinstance(value, MappingABC):
        return {k: _resolve(v, **kw) for k, v in value.items()}

    return value


def resolve_values(
    dependency_set: DependencySet,
    *,
    catalog: Optional[ResourceCatalog] = None,
    derived: Optional[Mapping[str, Fingerprint]] = None,
    clock: Clock = utc_now,
    resource_id: Optional[str] = None,
) -> Tuple[Any, ...]:
    """Resolve todos os valores do DependencySet, preservando a ordem.

    Raises:
        UnresolvedReferenceError: se uma referência não puder ser resolvida.
    """
    derived = derived or {}
    return tuple(
        _resolve(v, catalog=catalog, derived=derived, clock=clock, resource_id=resource_id)
        for v in dependency_set
    )
