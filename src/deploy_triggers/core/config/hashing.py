# src/deploy_triggers/core/config/hashing.py
"""
Hashing canônico da configuração efetiva.

O hash da configuração identifica o conjunto de settings usado em um
passe de planejamento e é registrado no event log do `PlanContext`.

Usa a mesma serialização canônica dos fingerprints: valores que o YAML
materializa fora do JSON (ex.: `reviewed: 2026-01-16` → `date`) são
normalizados; valores sem forma estável (NaN, sets) falham com
`NonDeterministicInputError`, com o caminho a partir de `$config`.
"""

import hashlib
from typing import Any, Dict

from deploy_triggers.core.fingerprint.canonical import canonical_value_bytes


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash SHA-256 hexadecimal (64 caracteres) da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
        NonDeterministicInputError: Se algum valor não tiver forma canônica.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    return hashlib.sha256(canonical_value_bytes(config, "$config")).hexdigest()
