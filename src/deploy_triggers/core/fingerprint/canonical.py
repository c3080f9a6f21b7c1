# src/deploy_triggers/core/fingerprint/canonical.py
"""
Serialização canônica de valores de dependência.

Este módulo converte um DependencySet já resolvido em uma sequência de
bytes estável, que é a entrada do digest. A mesma entrada lógica sempre
produz os mesmos bytes, entre execuções e entre avaliadores independentes.

Política de serialização (v1):
    - JSON canônico: sort_keys, separadores compactos, UTF-8, ensure_ascii=False
    - tuple → lista; Mapping → objeto com chaves string ordenadas
    - Enum → seu valor
    - Tipos fora do JSON viram objetos marcados com uma única chave de tipo:
        datetime → {"$datetime": ISO 8601 em UTC} (naive é assumido como UTC)
        date → {"$date": ISO 8601}; Decimal → {"$decimal": str}
        Fingerprint → {"$fingerprint": "<alg>:<hex>"}
        Resource → {"$resource": {"address", "attributes"}}
    - Chaves de mapa iniciadas por `$` recebem um `$` extra, de modo que
      nenhum mapa do usuário colide com um objeto marcado

Valores rejeitados com `NonDeterministicInputError`:
    - set / frozenset (sem ordem estável)
    - float não finito (nan, inf) e Decimal não finito
    - mapas com chaves não string
    - referências e fontes voláteis ainda não resolvidas
    - qualquer outro tipo (objetos, bytes, callables)

Invariantes:
    - Nenhum fingerprint é produzido a partir de serialização parcial
    - O caminho do valor rejeitado é informado no erro (ex.: `$[2].tags`)

Limites explícitos:
    - Não resolve referências (ver `resolve`)
    - Não calcula digest (ver `hashing`)
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List

from deploy_triggers.core.model.types import (
    DerivedRef,
    Fingerprint,
    Resource,
    ResourceRef,
    VolatileSource,
)

from .errors import NonDeterministicInputError


def _reject(path: str, value: Any, reason: str) -> NonDeterministicInputError:
    value_type = type(value).__name__
    return NonDeterministicInputError(
        f"cannot canonically serialize {value_type} at {path}: {reason}",
        path=path,
        value_type=value_type,
        reason=reason,
    )


def canonicalize(value: Any, path: str = "$") -> Any:
    """
    Converte um valor em sua forma canônica composta só de tipos JSON.

    Args:
        value: Valor de dependência já resolvido.
        path: Caminho do valor dentro do DependencySet (para mensagens de erro).

    Returns:
        Estrutura equivalente composta por None, bool, int, float, str,
        list e dict com chaves string.

    Raises:
        NonDeterministicInputError: Se o valor não tiver serialização canônica.
    """
    if isinstance(value, Enum):
        return canonicalize(value.value, path)

    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise _reject(path, value, "non-finite float")
        return value

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise _reject(path, value, "non-finite decimal")
        return {"$decimal": str(value)}

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"$datetime": value.astimezone(timezone.utc).isoformat()}

    if isinstance(value, date):
        return {"$date": value.isoformat()}

    if isinstance(value, Fingerprint):
        return {"$fingerprint": str(value)}

    if isinstance(value, Resource):
        return {"$resource": canonicalize(value.to_dict(), path)}

    if isinstance(value, (ResourceRef, DerivedRef, VolatileSource)):
        raise _reject(path, value, "reference/source must be resolved before fingerprinting")

    if isinstance(value, (set, frozenset)):
        raise _reject(path, value, "unordered collection")

    if isinstance(value, (list, tuple)):
        return [canonicalize(item, f"{path}[{i}]") for i, item in enumerate(value)]

    if isinstance(value, Mapping):
        out = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise _reject(f"{path}.{key!r}", key, "mapping keys must be strings")
            # "$" é reservado aos objetos marcados
            escaped = f"${key}" if key.startswith("$") else key
            out[escaped] = canonicalize(item, f"{path}.{key}")
        return out

    raise _reject(path, value, "unsupported type")


def _dumps(canonical: Any) -> str:
    return json.dumps(
        canonical,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def canonical_json(values: Iterable[Any]) -> str:
    """Serializa a sequência ordenada de valores em JSON canônico."""
    items: List[Any] = [canonicalize(v, f"$[{i}]") for i, v in enumerate(values)]
    return _dumps(items)


def canonical_value_bytes(value: Any, path: str = "$") -> bytes:
    """Serializa um único valor (ex.: a configuração efetiva) em bytes canônicos."""
    return _dumps(canonicalize(value, path)).encode("utf-8")


def canonical_bytes(values: Iterable[Any]) -> bytes:
    return canonical_json(values).encode("utf-8")
