"""
Schema canônico — Definitions v1.

Documento esperado:

    resources:
      - address: <tipo.nome>
        attributes: {<chave>: <valor>, ...}
    derived:
      - id: <tipo.nome>
        kind: deployment | stage | ...
        depends_on: [<id derivado>, ...]
        triggers:
          - ref: <endereço>            # mapa completo de atributos
          - ref: <endereço>.<atributo>
          - value: <literal>
          - source: timestamp | uuid   # volátil
          - derived: <id derivado>     # precisa constar em depends_on

Cada trigger declara exatamente uma chave.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Set, Tuple

from deploy_triggers.core.model.catalog import DuplicateResourceError, ResourceCatalog
from deploy_triggers.core.model.types import (
    VOLATILE_SOURCES,
    DependencySet,
    DerivedRef,
    DerivedResource,
    Resource,
    ResourceRef,
)

from .errors import DefinitionsValidationError


_TRIGGER_KEYS = ("ref", "value", "source", "derived")


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise DefinitionsValidationError(msg)


@dataclass(frozen=True)
class Definitions:
    """Representação interna das definições validadas."""

    catalog: ResourceCatalog
    derived: Tuple[DerivedResource, ...]

    def get_derived(self, derived_id: str) -> DerivedResource:
        for d in self.derived:
            if d.id == derived_id:
                return d
        raise KeyError(derived_id)


def parse_ref(text: str, catalog: ResourceCatalog) -> ResourceRef:
    """Interpreta `<endereço>` ou `<endereço>.<atributo>` contra o catálogo."""
    if catalog.has(text):
        return ResourceRef(address=text)
    if "." in text:
        address, attribute = text.rsplit(".", 1)
        if catalog.has(address):
            return ResourceRef(address=address, attribute=attribute)
    raise DefinitionsValidationError(f"unknown resource reference: {text}")


def _validate_resources(raw: Any) -> ResourceCatalog:
    _expect(isinstance(raw, list), "resources must be a list")
    catalog = ResourceCatalog()
    for i, r in enumerate(raw):
        _expect(isinstance(r, dict), f"resources[{i}] must be a mapping")
        address = r.get("address")
        _expect(_is_non_empty_str(address), f"resources[{i}].address is required")
        attributes = r.get("attributes") or {}
        _expect(isinstance(attributes, dict), f"resources[{i}].attributes must be a mapping")
        try:
            catalog.add(Resource(address=address, attributes=dict(attributes)))
        except DuplicateResourceError as e:
            raise DefinitionsValidationError(str(e)) from e
    return catalog


def _validate_trigger(
    item: Any,
    where: str,
    *,
    catalog: ResourceCatalog,
    depends_on: Set[str],
) -> Any:
    _expect(isinstance(item, dict), f"{where} must be a mapping")
    keys = [k for k in _TRIGGER_KEYS if k in item]
    _expect(len(keys) == 1 and len(item) == 1, f"{where} must declare exactly one of {_TRIGGER_KEYS}")
    key = keys[0]
    value = item[key]

    if key == "value":
        return value

    if key == "ref":
        _expect(_is_non_empty_str(value), f"{where}.ref must be a non-empty string")
        return parse_ref(value, catalog)

    if key == "source":
        _expect(value in VOLATILE_SOURCES, f"{where}.source must be one of {sorted(VOLATILE_SOURCES)}")
        return VOLATILE_SOURCES[value]()

    _expect(_is_non_empty_str(value), f"{where}.derived must be a non-empty string")
    _expect(value in depends_on, f"{where}.derived '{value}' must be listed in depends_on")
    return DerivedRef(derived_id=value)


def validate_definitions(data: Any) -> Definitions:
    """Valida e materializa Definitions v1."""
    _expect(isinstance(data, dict), "definitions must be a mapping/dict")

    catalog = _validate_resources(data.get("resources") or [])

    raw_derived = data.get("derived")
    _expect(isinstance(raw_derived, list) and raw_derived, "derived must be a non-empty list")

    ids: List[str] = []
    for i, d in enumerate(raw_derived):
        _expect(isinstance(d, dict), f"derived[{i}] must be a mapping")
        did = d.get("id")
        _expect(_is_non_empty_str(did), f"derived[{i}].id is required")
        _expect(did not in ids, f"duplicate derived id: {did}")
        ids.append(did)

    derived: List[DerivedResource] = []
    for i, d in enumerate(raw_derived):
        kind = d.get("kind", "deployment")
        _expect(_is_non_empty_str(kind), f"derived[{i}].kind must be a non-empty string")

        depends_on = d.get("depends_on") or []
        _expect(isinstance(depends_on, list), f"derived[{i}].depends_on must be a list")
        for dep in depends_on:
            _expect(dep in ids, f"derived[{i}].depends_on references unknown derived id: {dep}")

        triggers = d.get("triggers")
        _expect(isinstance(triggers, list) and triggers, f"derived[{i}].triggers must be a non-empty list")

        values = [
            _validate_trigger(t, f"derived[{i}].triggers[{j}]", catalog=catalog, depends_on=set(depends_on))
            for j, t in enumerate(triggers)
        ]

        derived.append(
            DerivedResource(
                id=d["id"],
                kind=kind,
                triggers=DependencySet(values=tuple(values)),
                depends_on=tuple(depends_on),
            )
        )

    return Definitions(catalog=catalog, derived=tuple(derived))
