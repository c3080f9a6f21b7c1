# tests/core/planner/test_ordering.py
"""
Testes da ordenação topológica dos recursos derivados.

Invariantes:
    - Nenhum recurso aparece antes de suas dependências
    - Empates são resolvidos por ordem lexicográfica de id
    - Dependências inexistentes e ciclos são erros fatais
"""

import pytest

from deploy_triggers.core.model import DependencySet, DerivedResource
from deploy_triggers.core.planner import CycleDetectedError, UnknownDependencyError, order_derived


def _d(did, *deps):
    return DerivedResource(id=did, triggers=DependencySet.of(did), depends_on=tuple(deps))


def test_dependencies_come_first():
    order = order_derived([_d("stage.prod", "deployment.main"), _d("deployment.main")])
    assert [d.id for d in order] == ["deployment.main", "stage.prod"]


def test_ties_are_lexicographic_and_stable():
    items = [_d("c"), _d("a"), _d("b", "a"), _d("d", "b", "c")]

    first = [d.id for d in order_derived(items)]
    second = [d.id for d in order_derived(list(reversed(items)))]

    assert first == ["a", "b", "c", "d"]
    assert first == second


def test_unknown_dependency():
    with pytest.raises(UnknownDependencyError):
        order_derived([_d("stage.prod", "deployment.missing")])


def test_cycle_detected():
    with pytest.raises(CycleDetectedError) as exc:
        order_derived([_d("a", "b"), _d("b", "a"), _d("c")])

    payload = exc.value.to_payload()
    assert payload.type == "PLAN_CONFIGURATION_ERROR"
    assert payload.details == {"unresolved": ["a", "b"]}


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        order_derived([_d("a"), _d("a")])
