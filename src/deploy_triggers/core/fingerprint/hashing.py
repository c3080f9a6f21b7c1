# src/deploy_triggers/core/fingerprint/hashing.py
"""
Digest canônico de DependencySets.

O fingerprint é o digest dos bytes canônicos de um DependencySet já
resolvido. Ele representa a identidade das dependências reais de um
recurso derivado: se qualquer valor mudar, ou a ordem mudar, o
fingerprint muda.

Política (v1):
    - Entrada: `canonical_bytes` (JSON canônico UTF-8)
    - Algoritmos: sha256 (padrão), sha1, sha512
    - Saída: `Fingerprint(algorithm, hexdigest)`

Limites explícitos:
    - Não resolve referências nem fontes voláteis
    - Não compara com estado persistido (ver `core.evaluator`)
"""

from __future__ import annotations

import hashlib
from typing import Any, Iterable

from deploy_triggers.core.model.types import SUPPORTED_ALGORITHMS, Fingerprint

from .canonical import canonical_bytes
from .errors import UnsupportedAlgorithmError


def compute_fingerprint(values: Iterable[Any], *, algorithm: str = "sha256") -> Fingerprint:
    """
    Calcula o fingerprint de uma sequência ordenada de valores resolvidos.

    Args:
        values: DependencySet (ou qualquer iterável) de valores resolvidos.
        algorithm: Algoritmo de digest.

    Returns:
        Fingerprint: algoritmo e digest hexadecimal de tamanho fixo.

    Raises:
        UnsupportedAlgorithmError: Se o algoritmo não for suportado.
        NonDeterministicInputError: Se algum valor não tiver forma canônica.
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise UnsupportedAlgorithmError(algorithm, sorted(SUPPORTED_ALGORITHMS))

    payload = canonical_bytes(values)
    return Fingerprint(algorithm=algorithm, digest=hashlib.new(algorithm, payload).hexdigest())
