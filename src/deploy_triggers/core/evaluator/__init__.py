# src/deploy_triggers/core/evaluator/__init__.py
"""
Evaluator do deploy-triggers.

Expõe a regra de decisão create / recreate / noop sobre fingerprints,
tanto como função (`evaluate`) quanto como avaliador configurado
(`FingerprintEvaluator`).
"""

from .evaluator import FingerprintEvaluator, decide, evaluate

__all__ = ["FingerprintEvaluator", "decide", "evaluate"]
