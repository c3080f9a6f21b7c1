# src/deploy_triggers/core/planner/plan.py
"""
Passe de planejamento sobre recursos derivados.

Um passe avalia cada recurso derivado exatamente uma vez, em ordem
topológica, contra o fingerprint persistido no state store. O
fingerprint recém-calculado de cada recurso fica disponível para os
recursos que dependem dele (`DerivedRef`): recriar um deployment muda o
fingerprint do stage no mesmo passe.

Fluxo:
    1. `order_derived` valida o grafo e define a ordem
    2. `plan` avalia e produz um `Plan` (sem escrever no store)
    3. `apply_plan` persiste os fingerprints de create/recreate

Invariantes:
    - `plan` nunca escreve no state store
    - `apply_plan` nunca reescreve entradas de recursos em NOOP
    - A geração começa em 1 e incrementa a cada recriação

Limites explícitos:
    - Não cria nem recria recursos reais
    - Não implementa rollback
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from deploy_triggers.core.config.settings import Settings
from deploy_triggers.core.context import PlanContext
from deploy_triggers.core.definitions.schema import Definitions
from deploy_triggers.core.evaluator.evaluator import FingerprintEvaluator
from deploy_triggers.core.model.types import Action, Clock, DerivedResource, Evaluation, Fingerprint, utc_now
from deploy_triggers.core.state.store import JsonFileStateStore, StateEntry, StateStore

from .ordering import order_derived


@dataclass(frozen=True)
class Plan:
    """Resultado ordenado de um passe de planejamento."""

    evaluations: Tuple[Evaluation, ...]
    pass_id: Optional[str] = None

    def get(self, resource_id: str) -> Evaluation:
        for ev in self.evaluations:
            if ev.resource_id == resource_id:
                return ev
        raise KeyError(resource_id)

    def changes(self) -> List[Evaluation]:
        return [ev for ev in self.evaluations if ev.recreate]

    def summary(self) -> Dict[str, int]:
        counts = Counter(ev.action.value for ev in self.evaluations)
        return {a.value: counts.get(a.value, 0) for a in Action}

    @property
    def has_hazards(self) -> bool:
        return any(ev.hazards for ev in self.evaluations)

    def to_dict(self) -> Dict[str, object]:
        return {
            "pass_id": self.pass_id,
            "summary": self.summary(),
            "evaluations": [ev.to_dict() for ev in self.evaluations],
        }


def plan(
    derived: Iterable[DerivedResource],
    store: StateStore,
    *,
    evaluator: FingerprintEvaluator,
    ctx: Optional[PlanContext] = None,
) -> Plan:
    """
    Avalia todos os recursos derivados contra o state store.

    Raises:
        UnknownDependencyError / CycleDetectedError: grafo inválido.
        FingerprintError: falha de avaliação de qualquer recurso (fail-fast).
    """
    ordered = order_derived(derived)

    if ctx is not None:
        ctx.log(
            resource_id=None,
            level="INFO",
            message="plan started",
            order=[d.id for d in ordered],
            config_hash=ctx.config_hash,
        )

    computed: Dict[str, Fingerprint] = {}
    evaluations: List[Evaluation] = []

    for resource in ordered:
        entry = store.get(resource.id)
        stored = entry.fingerprint if entry is not None else None
        ev = evaluator.evaluate(resource, stored, derived=computed, ctx=ctx)
        computed[resource.id] = ev.fingerprint
        evaluations.append(ev)

    result = Plan(evaluations=tuple(evaluations), pass_id=ctx.pass_id if ctx is not None else None)

    if ctx is not None:
        ctx.log(resource_id=None, level="INFO", message="plan finished", summary=result.summary())

    return result


def plan_definitions(
    definitions: Definitions,
    store: Optional[StateStore] = None,
    *,
    settings: Optional[Settings] = None,
    clock: Clock = utc_now,
    ctx: Optional[PlanContext] = None,
) -> Plan:
    """
    Atalho: monta o avaliador com o catálogo das definições e planeja.

    Sem `store` explícita, usa a `JsonFileStateStore` em `settings.state_path`;
    a mesma store (`JsonFileStateStore.from_settings`) recebe o `apply_plan`.
    """
    settings = settings or Settings()
    if store is None:
        store = JsonFileStateStore.from_settings(settings)
    evaluator = FingerprintEvaluator(settings, catalog=definitions.catalog, clock=clock)
    return plan(definitions.derived, store, evaluator=evaluator, ctx=ctx)


def apply_plan(
    result: Plan,
    store: StateStore,
    *,
    now: Optional[datetime] = None,
    ctx: Optional[PlanContext] = None,
) -> List[str]:
    """
    Persiste os fingerprints das avaliações create/recreate.

    Returns:
        List[str]: ids escritos no store, na ordem do plano.
    """
    ts = now or datetime.now(timezone.utc)
    written: List[str] = []

    for ev in result.evaluations:
        if not ev.recreate:
            continue

        current = store.get(ev.resource_id)
        entry = StateEntry.first(ev.fingerprint, ts) if current is None else current.next(ev.fingerprint, ts)
        store.put(ev.resource_id, entry)
        written.append(ev.resource_id)

        if ctx is not None:
            ctx.log(
                resource_id=ev.resource_id,
                level="INFO",
                message="fingerprint persisted",
                action=ev.action.value,
                fingerprint=str(ev.fingerprint),
                generation=entry.generation,
            )

    return written
