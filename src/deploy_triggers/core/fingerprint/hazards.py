"""Detecção de hazards de configuração em DependencySets.

Um trigger que depende de uma fonte volátil (ex.: horário corrente)
muda a cada avaliação e faz o recurso derivado ser recriado em todo
passe de planejamento. Isso não é bug: é anti-padrão documentado, e
precisa aparecer como hazard em vez de passar por detecção de mudança
correta.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List

from deploy_triggers.core.model.types import DependencySet, Hazard, VolatileSource


VOLATILE_TRIGGER = "VOLATILE_TRIGGER"


def _contains_volatile(value: Any) -> List[str]:
    if isinstance(value, VolatileSource):
        return [value.name]
    if isinstance(value, (list, tuple)):
        return [name for item in value for name in _contains_volatile(item)]
    if isinstance(value, Mapping):
        return [name for item in value.values() for name in _contains_volatile(item)]
    return []


def detect_hazards(dependency_set: DependencySet) -> List[Hazard]:
    """Retorna um Hazard por posição do DependencySet que contém fonte volátil."""
    hazards: List[Hazard] = []
    for index, value in enumerate(dependency_set):
        names = _contains_volatile(value)
        if not names:
            continue
        only = len(dependency_set) == 1
        hazards.append(
            Hazard(
                code=VOLATILE_TRIGGER,
                message=(
                    f"trigger value #{index} depends on volatile source(s) {sorted(set(names))}"
                    + ("; it is the only dependency" if only else "")
                    + ": every plan will signal recreate"
                ),
                index=index,
            )
        )
    return hazards


def volatile_source_names(dependency_set: DependencySet) -> List[str]:
    return sorted({name for value in dependency_set for name in _contains_volatile(value)})
