# src/deploy_triggers/core/config/merge.py
"""
Deep-merge determinístico de configuração.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - conflito de tipos → `ConfigTypeConflictError`

Nenhum input é mutado durante o processo.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina a configuração base com overrides explícitos.

    Usado para resolver `defaults.yaml` + arquivo local. O resultado é
    sempre um novo dicionário; chaves ausentes no override são
    preservadas da base.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se uma mesma chave tiver tipos incompatíveis.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # None no YAML significa "sem valor" e não conflita com o tipo base
        if base_value is not None and override_value is not None:
            if type(base_value) is not type(override_value):
                raise ConfigTypeConflictError(
                    f"Conflito de tipo na chave '{key}': "
                    f"{type(base_value).__name__} vs {type(override_value).__name__}"
                )

        result[key] = deepcopy(override_value)

    return result
