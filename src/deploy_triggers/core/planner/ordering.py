# src/deploy_triggers/core/planner/ordering.py
"""
Ordenação dos recursos derivados (DAG).

Um recurso derivado pode depender de outro (ex.: o stage depende do
deployment). Para que um `DerivedRef` resolva para o fingerprint já
calculado no mesmo passe, o upstream precisa ser avaliado antes.

Decisões arquiteturais:
    - Ordenação topológica determinística (Kahn)
    - Empates são resolvidos por ordem lexicográfica de `id`
    - Dependências inexistentes e ciclos são falhas fatais

Invariantes:
    - Nenhum recurso aparece antes de suas dependências
    - Todos os recursos aparecem exatamente uma vez
    - A mesma entrada produz sempre a mesma ordem
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Set

from deploy_triggers.core.errors import TriggerErrorPayload, plan_configuration_error
from deploy_triggers.core.model.types import DerivedResource


class PlanGraphError(ValueError):
    """Erro base de grafo inválido entre recursos derivados."""

    def __init__(self, message: str, **details: object) -> None:
        super().__init__(message)
        self.details = details

    def to_payload(self) -> TriggerErrorPayload:
        return plan_configuration_error(message=str(self), details=dict(self.details))


class UnknownDependencyError(PlanGraphError):
    """Recurso derivado declara em `depends_on` um id inexistente."""


class CycleDetectedError(PlanGraphError):
    """O grafo de `depends_on` contém um ciclo; nenhuma ordem válida existe."""


def order_derived(derived: Iterable[DerivedResource]) -> List[DerivedResource]:
    """
    Valida e produz a ordem topológica determinística de avaliação.

    Args:
        derived: Recursos derivados declarados.

    Returns:
        List[DerivedResource]: recursos em ordem de avaliação.

    Raises:
        ValueError: Se houver `id` duplicado.
        UnknownDependencyError: Se um recurso depender de id inexistente.
        CycleDetectedError: Se houver ciclo no grafo.
    """
    by_id: Dict[str, DerivedResource] = {}
    for d in derived:
        if d.id in by_id:
            raise ValueError(f"Duplicate derived id: {d.id}")
        by_id[d.id] = d

    for did, d in by_id.items():
        for dep in d.depends_on:
            if dep not in by_id:
                raise UnknownDependencyError(
                    f"Derived '{did}' depends on unknown derived '{dep}'",
                    derived_id=did,
                    dependency=dep,
                )

    incoming_count: Dict[str, int] = {did: len(set(d.depends_on)) for did, d in by_id.items()}
    outgoing: Dict[str, Set[str]] = {did: set() for did in by_id}
    for did, d in by_id.items():
        for dep in set(d.depends_on):
            outgoing[dep].add(did)

    ready: List[str] = sorted(did for did, c in incoming_count.items() if c == 0)
    order_ids: List[str] = []

    while ready:
        did = ready.pop(0)
        order_ids.append(did)
        for child in sorted(outgoing[did]):
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                ready.append(child)
                ready.sort()

    if len(order_ids) != len(by_id):
        raise CycleDetectedError(
            "Cycle detected in derived dependency graph",
            unresolved=sorted(set(by_id) - set(order_ids)),
        )

    return [by_id[did] for did in order_ids]
