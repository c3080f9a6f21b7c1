# src/deploy_triggers/__init__.py
"""
deploy-triggers — avaliação de recriação orientada a fingerprint.

Ferramentas declarativas de infraestrutura costumam tratar um *deployment*
como um snapshot imutável: alterar um método, uma integração ou um recurso
do qual ele depende não recria o deployment, e o stage continua apontando
para a configuração antiga. A solução é explícita: um *trigger* calculado
como hash das dependências reais do deployment.

Este pacote implementa esse mecanismo como biblioteca:
    - core.fingerprint → serialização canônica e digest das dependências
    - core.evaluator   → regra de decisão (create / recreate / noop)
    - core.state       → fingerprints persistidos por recurso derivado
    - core.planner     → passe de planejamento sobre vários recursos derivados
    - core.context     → event log estruturado do passe

Limites explícitos:
    - Não cria nem altera recursos reais em nenhum provedor
    - Não implementa CLI nem protocolo de rede
"""
# src/deploy_triggers/__init__.py
from .core.evaluator import FingerprintEvaluator, evaluate
from .core.model import (
    Action,
    DependencySet,
    DerivedRef,
    DerivedResource,
    Evaluation,
    Fingerprint,
    Resource,
    ResourceRef,
    TimestampSource,
    UuidSource,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "DependencySet",
    "DerivedRef",
    "DerivedResource",
    "Evaluation",
    "Fingerprint",
    "FingerprintEvaluator",
    "Resource",
    "ResourceRef",
    "TimestampSource",
    "UuidSource",
    "evaluate",
    "__version__",
]
