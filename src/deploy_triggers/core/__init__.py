# src/deploy_triggers/core/__init__.py
"""
Core do deploy-triggers.

Este pacote reúne a implementação canônica do avaliador de recriação
orientado a fingerprint e tudo o que ele precisa para operar de forma
determinística e rastreável.

Componentes principais:
    - config      → carregamento, merge, hashing e settings tipados
    - model       → Resource, DependencySet, Fingerprint, DerivedResource
    - fingerprint → serialização canônica, digest e detecção de hazards
    - evaluator   → regra de decisão create / recreate / noop
    - state       → store externo de fingerprints persistidos
    - definitions → carregamento e validação de definições declarativas
    - planner     → ordenação topológica e passe de planejamento
    - context     → event log estruturado e warnings por recurso

Princípios fundamentais:
    - Nenhuma decisão silenciosa: entradas não determinísticas falham
    - Estado persistido vive fora do processo, nunca em variáveis globais
    - A mesma entrada sempre produz o mesmo fingerprint
"""
