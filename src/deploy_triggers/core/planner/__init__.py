# src/deploy_triggers/core/planner/__init__.py
"""
Planner do deploy-triggers.

Responsável por ordenar os recursos derivados (DAG), avaliá-los uma vez
por passe e persistir os fingerprints resultantes.
"""

from .ordering import CycleDetectedError, PlanGraphError, UnknownDependencyError, order_derived
from .plan import Plan, apply_plan, plan, plan_definitions

__all__ = [
    "CycleDetectedError",
    "PlanGraphError",
    "Plan",
    "UnknownDependencyError",
    "apply_plan",
    "order_derived",
    "plan",
    "plan_definitions",
]
