# src/deploy_triggers/core/evaluator/evaluator.py
"""
Fingerprint Evaluator — decisão de recriação de recursos derivados.

Dado um DependencySet e o fingerprint persistido na última materialização
(ou nenhum), o avaliador calcula o fingerprint atual e decide:

    - CREATE   → nenhum fingerprint persistido (primeira materialização)
    - RECREATE → fingerprint atual difere do persistido
    - NOOP     → fingerprints iguais

Fluxo de avaliação:
    1. Detecção de hazards (fontes voláteis)
    2. Resolução de referências (catálogo, recursos derivados, relógio)
    3. Serialização canônica + digest
    4. Comparação com o fingerprint persistido

Decisões arquiteturais:
    - A avaliação é pura: o state store não é lido nem escrito aqui
    - Hazards voláteis são sempre reportados; sob a política `error`
      a avaliação é interrompida com `VolatileTriggerHazardError`
    - Falhas de serialização propagam `NonDeterministicInputError`
      sem produzir fingerprint parcial

Invariantes:
    - O mesmo DependencySet resolvido sempre produz o mesmo fingerprint
    - `recreate` é verdadeiro se e somente se a ação não for NOOP

Limites explícitos:
    - Não persiste fingerprints (ver `core.planner.apply_plan`)
    - Não cria nem recria recursos reais
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from deploy_triggers.core.config.settings import HAZARD_POLICIES, Settings
from deploy_triggers.core.context import PlanContext
from deploy_triggers.core.fingerprint.errors import (
    NonDeterministicInputError,
    UnresolvedReferenceError,
    VolatileTriggerHazardError,
)
from deploy_triggers.core.fingerprint.hashing import compute_fingerprint
from deploy_triggers.core.fingerprint.hazards import detect_hazards, volatile_source_names
from deploy_triggers.core.fingerprint.resolve import resolve_values
from deploy_triggers.core.model.catalog import ResourceCatalog
from deploy_triggers.core.model.types import (
    Action,
    Clock,
    DependencySet,
    DerivedResource,
    Evaluation,
    Fingerprint,
    utc_now,
)


StoredFingerprint = Optional[Union[Fingerprint, str]]


def _coerce_stored(stored: StoredFingerprint) -> Optional[Fingerprint]:
    if stored is None or isinstance(stored, Fingerprint):
        return stored
    return Fingerprint.parse(stored)


def decide(current: Fingerprint, stored: Optional[Fingerprint]) -> Action:
    """Regra de decisão: create sem estado, recreate se diferente, noop se igual."""
    if stored is None:
        return Action.CREATE
    if stored != current:
        return Action.RECREATE
    return Action.NOOP


def evaluate(
    dependency_set: DependencySet,
    stored: StoredFingerprint = None,
    *,
    algorithm: str = "sha256",
    catalog: Optional[ResourceCatalog] = None,
    derived: Optional[Mapping[str, Fingerprint]] = None,
    clock: Clock = utc_now,
    hazard_policy: str = "warn",
    resource_id: Optional[str] = None,
    ctx: Optional[PlanContext] = None,
) -> Evaluation:
    """
    Avalia um DependencySet contra o fingerprint persistido.

    Args:
        dependency_set: Dependências ordenadas do recurso derivado.
        stored: Fingerprint da última materialização (ou None / string `<alg>:<hex>`).
        algorithm: Algoritmo de digest.
        catalog: Catálogo para resolver `ResourceRef`.
        derived: Fingerprints já calculados no passe, para `DerivedRef`.
        clock: Relógio usado por fontes voláteis.
        hazard_policy: `warn` (reporta e segue) ou `error` (interrompe).
        resource_id: Identificador do recurso derivado (diagnóstico e log).
        ctx: Contexto do passe para eventos e warnings.

    Returns:
        Evaluation: ação decidida e fingerprint a persistir.

    Raises:
        ValueError: Se `hazard_policy` não for `warn` nem `error`.
        VolatileTriggerHazardError: Fonte volátil sob política `error`.
        UnresolvedReferenceError: Referência inexistente.
        NonDeterministicInputError: Valor sem serialização canônica.
    """
    if hazard_policy not in HAZARD_POLICIES:
        raise ValueError(f"hazard_policy must be one of {HAZARD_POLICIES}, got: {hazard_policy!r}")

    rid = resource_id or "<anonymous>"
    hazards = tuple(detect_hazards(dependency_set))

    if hazards and hazard_policy == "error":
        sources = volatile_source_names(dependency_set)
        if ctx is not None:
            ctx.log(resource_id=rid, level="ERROR", message="volatile trigger rejected", sources=sources)
        raise VolatileTriggerHazardError(resource_id, sources)

    try:
        resolved = resolve_values(
            dependency_set,
            catalog=catalog,
            derived=derived,
            clock=clock,
            resource_id=resource_id,
        )
        current = compute_fingerprint(resolved, algorithm=algorithm)
    except NonDeterministicInputError as e:
        e.resource_id = resource_id
        if ctx is not None:
            ctx.log(resource_id=rid, level="ERROR", message=str(e), error=e.to_payload().to_dict())
        raise
    except UnresolvedReferenceError as e:
        if ctx is not None:
            ctx.log(resource_id=rid, level="ERROR", message=str(e), error=e.to_payload().to_dict())
        raise

    previous = _coerce_stored(stored)
    action = decide(current, previous)

    if ctx is not None:
        for hazard in hazards:
            ctx.add_warning(resource_id=rid, message=hazard.message)
            ctx.log(resource_id=rid, level="WARNING", message=hazard.message, hazard=hazard.to_dict())
        ctx.log(
            resource_id=rid,
            level="INFO",
            message=f"{action.value}",
            fingerprint=str(current),
            previous=str(previous) if previous is not None else None,
        )

    return Evaluation(
        resource_id=rid,
        action=action,
        fingerprint=current,
        previous=previous,
        hazards=hazards,
    )


class FingerprintEvaluator:
    """Avaliador configurado por `Settings`, reutilizável entre recursos de um passe."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        catalog: Optional[ResourceCatalog] = None,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings or Settings()
        self.catalog = catalog
        self.clock = clock

    def evaluate(
        self,
        resource: DerivedResource,
        stored: StoredFingerprint = None,
        *,
        derived: Optional[Mapping[str, Fingerprint]] = None,
        ctx: Optional[PlanContext] = None,
    ) -> Evaluation:
        return evaluate(
            resource.triggers,
            stored,
            algorithm=self.settings.algorithm,
            catalog=self.catalog,
            derived=derived,
            clock=self.clock,
            hazard_policy=self.settings.volatile_inputs,
            resource_id=resource.id,
            ctx=ctx,
        )
